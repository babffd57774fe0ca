import pytest
import requests

import text_generator
from models import Booking
from text_generator import (
    CONFIRMATION_EMPTY,
    CONFIRMATION_ERROR,
    SUMMARY_EMPTY,
    SUMMARY_ERROR,
    SUMMARY_NO_KEY,
    TextGenerator,
)


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload or {}
        self.status_code = status_code
        self.ok = status_code < 400
        self.text = str(payload)

    def json(self):
        return self.payload

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")


def gemini_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def booking():
    return Booking(
        id="1", service_id="1", service_name="Degradê Neon", customer_name="Ana",
        customer_phone="", date="2030-01-02", time="10:30",
    )


@pytest.fixture
def captured(monkeypatch):
    """Replace requests.post; tests set captured["response"] or captured["error"]."""
    calls = {"response": FakeResponse(gemini_payload("Fechou! 💈")), "error": None, "requests": []}

    def fake_post(url, **kwargs):
        calls["requests"].append((url, kwargs))
        if calls["error"]:
            raise calls["error"]
        return calls["response"]

    monkeypatch.setattr(text_generator.requests, "post", fake_post)
    return calls


def test_without_api_key_no_request_is_made(booking, captured):
    generator = TextGenerator(api_key="", model="m")

    assert generator.confirm_for(booking, "Shop") == "Agendamento confirmado para Degradê Neon às 10:30."
    assert generator.summarize([booking], "Shop") == SUMMARY_NO_KEY
    assert captured["requests"] == []


def test_confirmation_request(booking, captured):
    generator = TextGenerator(api_key="secret", model="gemini-test", timeout=3)

    assert generator.confirm_for(booking, "Navalha") == "Fechou! 💈"

    url, kwargs = captured["requests"][0]
    assert url.endswith("/models/gemini-test:generateContent")
    assert kwargs["params"] == {"key": "secret"}
    assert kwargs["timeout"] == 3
    prompt = kwargs["json"]["contents"][0]["parts"][0]["text"]
    assert '"Navalha"' in prompt
    assert "Ana" in prompt and "2030-01-02" in prompt and "10:30" in prompt


def test_confirmation_with_empty_text(booking, captured):
    captured["response"] = FakeResponse({"candidates": []})
    assert TextGenerator("secret", "m").confirm_for(booking) == CONFIRMATION_EMPTY


def test_confirmation_on_network_error(booking, captured):
    captured["error"] = requests.ConnectionError("offline")
    assert TextGenerator("secret", "m").confirm_for(booking) == CONFIRMATION_ERROR


def test_confirmation_on_http_error(booking, captured):
    captured["response"] = FakeResponse({"error": "quota"}, status_code=429)
    assert TextGenerator("secret", "m").confirm_for(booking) == CONFIRMATION_ERROR


def test_summary_lists_schedule(booking, captured):
    captured["response"] = FakeResponse(gemini_payload("  Dia cheio, bora!  "))

    assert TextGenerator("secret", "m").summarize([booking], "Navalha") == "Dia cheio, bora!"

    prompt = captured["requests"][0][1]["json"]["contents"][0]["parts"][0]["text"]
    assert "10:30: Degradê Neon com Ana" in prompt


def test_summary_fallbacks(booking, captured):
    generator = TextGenerator("secret", "m")

    captured["response"] = FakeResponse(gemini_payload(""))
    assert generator.summarize([booking]) == SUMMARY_EMPTY

    captured["error"] = requests.Timeout("slow")
    assert generator.summarize([booking]) == SUMMARY_ERROR
