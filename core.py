# core.py
import os
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, render_template, request

from models import db, BookingStatus
from slots import slot_times
from storage import BlobStorage
from store import BookingStore
from text_generator import TextGenerator


class BarbershopBaseApp:
    """Application base: configuration, logging, database and the booking store."""

    def __init__(self, config: Optional[dict] = None):
        # Flask app
        self.app = Flask(__name__, instance_relative_config=True)

        # 🔹 Logger first
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )
        self.logger = logging.getLogger("Barbershop")

        # 🔹 Config from environment, overrides win
        self._load_config(config or {})

        # 🔹 Flask config
        self.app.config["SECRET_KEY"] = self.secret_key
        self.app.config["SQLALCHEMY_DATABASE_URI"] = self.database_url
        self.app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
        self.app.config["TESTING"] = self.testing

        # 🔹 SQLAlchemy
        db.init_app(self.app)

        # 🔹 Text generation
        self.text_generator = TextGenerator(
            api_key=self.gemini_api_key,
            model=self.gemini_model,
            timeout=self.gemini_timeout,
        )

        # 🔹 Tables and state
        self._init_db()

        # 🔹 Errors
        self._register_error_handlers()

        self.logger.info("Barbershop app initialised")

    # -------------------------------------------------

    def _load_config(self, overrides: dict):
        load_dotenv()

        def setting(name: str, default=None):
            if name in overrides:
                return overrides[name]
            return os.getenv(name, default)

        self.secret_key = setting("SECRET_KEY", "dev-secret-key")
        self.gemini_api_key = setting("GEMINI_API_KEY") or setting("API_KEY") or ""
        self.gemini_model = setting("GEMINI_MODEL", "gemini-3-flash-preview")
        self.database_url = setting("DATABASE_URL") or (
            "sqlite:///" + os.path.join(self.app.instance_path, "barbershop.db")
        )
        self.testing = str(setting("TESTING", "")).lower() in ("1", "true", "yes")

        try:
            self.gemini_timeout = float(setting("GEMINI_TIMEOUT", 10))
        except (TypeError, ValueError):
            raise RuntimeError("GEMINI_TIMEOUT must be a number")

        if not self.gemini_api_key:
            self.logger.warning("GEMINI_API_KEY is not set, using canned texts")

        self.logger.info(f"Config loaded (model={self.gemini_model})")

    # -------------------------------------------------

    def _init_db(self):
        os.makedirs(self.app.instance_path, exist_ok=True)

        with self.app.app_context():
            db.create_all()
            self.store = BookingStore(BlobStorage(), self.text_generator)
            self.logger.info("Database initialised")

    # -------------------------------------------------

    def _register_error_handlers(self):
        @self.app.errorhandler(404)
        def not_found(error):
            self.logger.warning(f"404: {request.path}")
            return render_template("landing.html", settings=self.store.settings), 404

        @self.app.errorhandler(500)
        def internal_error(error):
            self.logger.exception("500 error")
            db.session.rollback()
            flash("Erro interno do servidor.", "info")
            return render_template("landing.html", settings=self.store.settings), 500

    # -------------------------------------------------
    # Validation

    @staticmethod
    def validate_booking_data(service_id: str, date: str, time_: str, name: str) -> bool:
        return all([service_id.strip(), date.strip(), time_.strip(), name.strip()])

    @staticmethod
    def validate_time(time_: str) -> bool:
        return time_ in slot_times()

    @staticmethod
    def validate_service_data(name: str, price: Optional[float]) -> bool:
        return bool(name.strip()) and price is not None and price > 0

    @staticmethod
    def parse_rating(raw: Optional[str], default: int = 5) -> int:
        try:
            rating = int(raw)
        except (TypeError, ValueError):
            return default
        return min(max(rating, 1), 5)

    @staticmethod
    def parse_price(raw: Optional[str]) -> Optional[float]:
        try:
            return float(raw)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def parse_duration(raw: Optional[str]) -> Optional[int]:
        try:
            duration = int(raw)
        except (TypeError, ValueError):
            return None
        return duration if duration > 0 else None

    @staticmethod
    def parse_status(raw: Optional[str]) -> Optional[BookingStatus]:
        try:
            return BookingStatus(raw)
        except ValueError:
            return None

    # -------------------------------------------------

    def run(self, port: int = 5000, debug: bool = False):
        self.logger.info(f"Flask running on port {port}")
        self.app.run(host="0.0.0.0", port=port, debug=debug)
