# text_generator.py
import logging
from typing import Iterable, Optional

import requests

from models import Booking

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_SHOP_NAME = "BARBEARIA GONÇALVES"

CONFIRMATION_EMPTY = "Tudo pronto! Nos vemos na cadeira."
CONFIRMATION_ERROR = "Agendamento confirmado! Estamos ansiosos para vê-lo."
SUMMARY_NO_KEY = "Confira sua agenda abaixo."
SUMMARY_EMPTY = "Parece um dia cheio. Vamos ao trabalho!"
SUMMARY_ERROR = "Aqui está sua agenda para hoje."


def offline_confirmation(booking: Booking) -> str:
    return f"Agendamento confirmado para {booking.service_name} às {booking.time}."


class TextGenerator:
    """Short pt-BR texts from Gemini. Always returns a string, never raises."""

    def __init__(self, api_key: Optional[str], model: str, timeout: float = 10):
        self.api_key = api_key or ""
        self.model = model
        self.timeout = timeout

    # -------------------------------------------------

    def confirm_for(self, booking: Booking, shop_name: str = DEFAULT_SHOP_NAME) -> str:
        if not self.api_key:
            return offline_confirmation(booking)

        prompt = (
            f'Você é um assistente de IA moderno e descolado para uma barbearia chamada "{shop_name}".\n'
            f"Um cliente chamado {booking.customer_name} acabou de agendar um "
            f'"{booking.service_name}" para o dia {booking.date} às {booking.time}.\n\n'
            "Escreva uma mensagem curta e animada de confirmação (máximo 2 frases) "
            "para enviar a ele em Português do Brasil.\n"
            "Use emojis. Seja estiloso."
        )
        try:
            return self._generate(prompt) or CONFIRMATION_EMPTY
        except Exception:
            logger.exception("Gemini API error while generating confirmation")
            return CONFIRMATION_ERROR

    def summarize(self, bookings: Iterable[Booking], shop_name: str = DEFAULT_SHOP_NAME) -> str:
        if not self.api_key:
            return SUMMARY_NO_KEY

        schedule = "\n".join(f"{b.time}: {b.service_name} com {b.customer_name}" for b in bookings)
        prompt = (
            f'Você é um assistente de barbeiro na "{shop_name}". Aqui está a agenda de hoje:\n'
            f"{schedule}\n\n"
            "Dê um resumo motivacional de 1 frase para o barbeiro começar o dia, em Português do Brasil."
        )
        try:
            return self._generate(prompt) or SUMMARY_EMPTY
        except Exception:
            logger.exception("Gemini API error while generating day summary")
            return SUMMARY_ERROR

    # -------------------------------------------------

    def _generate(self, prompt: str) -> str:
        url = GEMINI_URL.format(model=self.model)
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        r = requests.post(
            url,
            params={"key": self.api_key},
            json=payload,
            timeout=self.timeout,
        )
        if not r.ok:
            logger.error(f"Gemini error: {r.status_code} {r.text}")
            r.raise_for_status()

        candidates = r.json().get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts") or []
        return "".join(p.get("text", "") for p in parts).strip()
