# store.py
import logging
import time
from datetime import date as Date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Union

from data import (
    BOOKINGS_KEY,
    DEFAULT_SERVICE_DURATION,
    DEFAULT_SERVICE_IMAGE,
    SERVICES_KEY,
    SETTINGS_KEY,
    initial_bookings,
    initial_services,
    initial_settings,
)
from models import Booking, BookingStatus, Review, Service, ShopSettings, TimeSlot
from slots import generate_time_slots, is_slot_available
from text_generator import offline_confirmation

logger = logging.getLogger(__name__)

UNKNOWN_SERVICE_NAME = "Serviço Diverso"


def today_iso() -> str:
    return Date.today().isoformat()


class BookingStore:
    """
    Single source of truth for shop settings, the service catalog and bookings.

    Every mutation saves the collection it touched before returning. Guard
    failures (missing required input, unknown id) are no-ops that return None.
    """

    def __init__(self, storage, text_generator):
        self.storage = storage
        self.text_generator = text_generator

        saved_settings = storage.load(SETTINGS_KEY)
        saved_services = storage.load(SERVICES_KEY)
        saved_bookings = storage.load(BOOKINGS_KEY)

        self.settings: ShopSettings = (
            ShopSettings.from_dict(saved_settings) if saved_settings is not None else initial_settings()
        )
        self.services: List[Service] = (
            [Service.from_dict(s) for s in saved_services] if saved_services is not None else initial_services()
        )
        self.bookings: List[Booking] = (
            [Booking.from_dict(b) for b in saved_bookings]
            if saved_bookings is not None
            else initial_bookings(today_iso())
        )

        # seed data is written once so restarts keep the same records
        if saved_settings is None:
            self._save_settings()
        if saved_services is None:
            self._save_services()
        if saved_bookings is None:
            self._save_bookings()

        logger.info(
            f"Store loaded: {len(self.services)} services, {len(self.bookings)} bookings"
        )

    # -------------------------------------------------
    # Persistence

    def _save_settings(self) -> None:
        self.storage.save(SETTINGS_KEY, self.settings.to_dict())

    def _save_services(self) -> None:
        self.storage.save(SERVICES_KEY, [s.to_dict() for s in self.services])

    def _save_bookings(self) -> None:
        self.storage.save(BOOKINGS_KEY, [b.to_dict() for b in self.bookings])

    def _new_id(self, prefix: str = "") -> str:
        taken = {s.id for s in self.services} | {b.id for b in self.bookings}
        stamp = int(time.time() * 1000)
        while f"{prefix}{stamp}" in taken:
            stamp += 1
        return f"{prefix}{stamp}"

    # -------------------------------------------------
    # Lookups

    def get_service(self, service_id: str) -> Optional[Service]:
        return next((s for s in self.services if s.id == service_id), None)

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return next((b for b in self.bookings if b.id == booking_id), None)

    def time_slots(self, date: str) -> List[TimeSlot]:
        return generate_time_slots(date, self.bookings)

    def is_slot_available(self, date: str, time_: str) -> bool:
        return is_slot_available(date, time_, self.bookings)

    # -------------------------------------------------
    # Customer operations

    def create_booking(
        self,
        service: Optional[Service],
        date: str,
        time_: str,
        customer_name: str,
        customer_phone: str = "",
    ) -> Optional[Booking]:
        # Slot conflicts are checked by the caller, not here.
        if not service or not date or not time_ or not customer_name:
            return None

        booking = Booking(
            id=self._new_id(),
            service_id=service.id,
            service_name=service.name,
            customer_name=customer_name,
            customer_phone=customer_phone or "",
            date=date,
            time=time_,
            status=BookingStatus.CONFIRMED,
        )

        try:
            message = self.text_generator.confirm_for(booking, self.settings.name)
        except Exception:
            logger.exception("Text generator failed, using offline confirmation")
            message = None
        booking.ai_confirmation_message = message or offline_confirmation(booking)

        self.bookings.append(booking)
        self._save_bookings()
        logger.info(f"Booking created: {booking.id} {service.name} {date} {time_} ({customer_name})")
        return booking

    def submit_review(
        self,
        service_id: str,
        customer_name: str,
        rating: int = 5,
        comment: str = "",
    ) -> Optional[Booking]:
        """Store a review as a completed booking stamped with the current date and time."""
        if not service_id or not customer_name:
            return None
        if not 1 <= rating <= 5:
            return None

        now = datetime.now()
        today = now.date().isoformat()
        service = self.get_service(service_id)

        booking = Booking(
            id=self._new_id("review-"),
            service_id=service_id,
            service_name=service.name if service else UNKNOWN_SERVICE_NAME,
            customer_name=customer_name,
            customer_phone="N/A",
            date=today,
            time=now.strftime("%H:%M"),
            status=BookingStatus.COMPLETED,
            review=Review(rating=rating, comment=comment or "", date=today),
        )

        self.bookings.append(booking)
        self._save_bookings()
        logger.info(f"Review added: {booking.id} rating={rating} ({customer_name})")
        return booking

    # -------------------------------------------------
    # Service catalog

    def create_service(
        self,
        name: str,
        price: float,
        description: str = "",
        duration_minutes: Optional[int] = None,
        image: Optional[str] = None,
    ) -> Optional[Service]:
        if not name or not price or price <= 0:
            return None

        service = Service(
            id=self._new_id(),
            name=name,
            description=description or "",
            price=price,
            duration_minutes=duration_minutes or DEFAULT_SERVICE_DURATION,
            image=image or DEFAULT_SERVICE_IMAGE,
        )
        self.services.append(service)
        self._save_services()
        logger.info(f"Service created: {service.id} {name}")
        return service

    def update_service(self, service_id: str, **fields) -> Optional[Service]:
        service = self.get_service(service_id)
        if service is None:
            return None

        for name in ("name", "description", "price", "duration_minutes", "image"):
            value = fields.get(name)
            if value is not None:
                setattr(service, name, value)

        self._save_services()
        logger.info(f"Service updated: {service_id}")
        return service

    def delete_service(self, service_id: str) -> bool:
        # Bookings keep their service_id and denormalized name.
        remaining = [s for s in self.services if s.id != service_id]
        if len(remaining) == len(self.services):
            return False

        self.services = remaining
        self._save_services()
        logger.info(f"Service deleted: {service_id}")
        return True

    # -------------------------------------------------
    # Booking administration

    def update_booking(
        self,
        booking_id: str,
        customer_name: Optional[str] = None,
        date: Optional[str] = None,
        time_: Optional[str] = None,
        status: Optional[Union[BookingStatus, str]] = None,
    ) -> Optional[Booking]:
        booking = self.get_booking(booking_id)
        if booking is None:
            return None

        if customer_name is not None:
            booking.customer_name = customer_name
        if date is not None:
            booking.date = date
        if time_ is not None:
            booking.time = time_
        if status is not None:
            booking.status = BookingStatus(status)

        self._save_bookings()
        logger.info(f"Booking updated: {booking_id}")
        return booking

    def _set_status(self, booking_id: str, status: BookingStatus) -> Optional[Booking]:
        booking = self.get_booking(booking_id)
        if booking is None:
            return None

        booking.status = status
        self._save_bookings()
        logger.info(f"Booking {booking_id} -> {status.value}")
        return booking

    def complete_booking(self, booking_id: str) -> Optional[Booking]:
        return self._set_status(booking_id, BookingStatus.COMPLETED)

    def cancel_booking(self, booking_id: str) -> Optional[Booking]:
        return self._set_status(booking_id, BookingStatus.CANCELLED)

    # -------------------------------------------------
    # Settings

    def update_settings(self, name: Optional[str] = None, tagline: Optional[str] = None) -> ShopSettings:
        if name is not None:
            self.settings.name = name
        if tagline is not None:
            self.settings.tagline = tagline

        self._save_settings()
        logger.info(f"Shop settings updated: {self.settings.name}")
        return self.settings

    # -------------------------------------------------
    # Reporting

    def todays_confirmed(self) -> List[Booking]:
        today = today_iso()
        return [b for b in self.bookings if b.date == today and b.status == BookingStatus.CONFIRMED]

    def daily_summary(self) -> str:
        return self.text_generator.summarize(self.todays_confirmed(), self.settings.name)

    def todays_appointments(self) -> List[Booking]:
        today = today_iso()
        todays = [b for b in self.bookings if b.date == today and b.status != BookingStatus.CANCELLED]
        return sorted(todays, key=lambda b: b.time)

    def total_revenue(self) -> float:
        """Catalog price of completed bookings plus today's confirmed ones."""
        today = today_iso()
        prices = {s.id: s.price for s in self.services}
        return sum(
            prices.get(b.service_id, 0)
            for b in self.bookings
            if b.status == BookingStatus.COMPLETED
            or (b.status == BookingStatus.CONFIRMED and b.date == today)
        )

    def history(self) -> List[Booking]:
        completed = [b for b in self.bookings if b.status == BookingStatus.COMPLETED]
        return sorted(completed, key=lambda b: (b.date, b.time), reverse=True)

    def reviews(self) -> List[Booking]:
        reviewed = [b for b in self.bookings if b.review is not None]
        return sorted(reviewed, key=lambda b: b.review.date, reverse=True)

    def review_count(self) -> int:
        return sum(1 for b in self.bookings if b.review is not None)

    def average_rating(self) -> float:
        ratings = [b.review.rating for b in self.bookings if b.review is not None]
        if not ratings:
            return 0
        mean = Decimal(sum(ratings)) / Decimal(len(ratings))
        return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
