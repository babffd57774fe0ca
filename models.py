# models.py
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Optional

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class StoredBlob(db.Model):
    """One JSON document per key (settings, services, bookings)."""
    __tablename__ = "stored_blob"

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.now, onupdate=datetime.now)

    def __repr__(self):
        return f"<StoredBlob {self.key}>"


class UserRole(str, Enum):
    CLIENT = "CLIENT"
    BARBER = "BARBER"
    NONE = "NONE"


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass
class Service:
    id: str
    name: str
    description: str
    price: float
    duration_minutes: int
    image: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Service":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description", ""),
            price=float(data.get("price", 0)),
            duration_minutes=int(data.get("duration_minutes", 30)),
            image=data.get("image", ""),
        )


@dataclass(frozen=True)
class Review:
    rating: int
    comment: str
    date: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Review":
        return cls(
            rating=int(data["rating"]),
            comment=data.get("comment", ""),
            date=data["date"],
        )


@dataclass
class Booking:
    id: str
    service_id: str
    service_name: str
    customer_name: str
    customer_phone: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    status: BookingStatus = BookingStatus.CONFIRMED
    ai_confirmation_message: Optional[str] = None
    review: Optional[Review] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "service_id": self.service_id,
            "service_name": self.service_name,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "date": self.date,
            "time": self.time,
            "status": self.status.value,
        }
        if self.ai_confirmation_message is not None:
            data["ai_confirmation_message"] = self.ai_confirmation_message
        if self.review is not None:
            data["review"] = self.review.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Booking":
        review = data.get("review")
        return cls(
            id=str(data["id"]),
            service_id=str(data.get("service_id", "")),
            service_name=data.get("service_name", ""),
            customer_name=data.get("customer_name", ""),
            customer_phone=data.get("customer_phone", ""),
            date=data["date"],
            time=data["time"],
            status=BookingStatus(data.get("status", BookingStatus.CONFIRMED.value)),
            ai_confirmation_message=data.get("ai_confirmation_message"),
            review=Review.from_dict(review) if review else None,
        )


@dataclass
class ShopSettings:
    name: str
    tagline: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ShopSettings":
        return cls(name=data.get("name", ""), tagline=data.get("tagline", ""))


@dataclass(frozen=True)
class TimeSlot:
    time: str
    available: bool = True
