# slots.py
from typing import Iterable, List

from data import business_hours
from models import Booking, BookingStatus, TimeSlot


def slot_times() -> List[str]:
    """Every slot start of the business day, as HH:MM."""
    times = []
    for hour in range(business_hours["open_hour"], business_hours["close_hour"]):
        for minute in range(0, 60, business_hours["slot_minutes"]):
            times.append(f"{hour:02d}:{minute:02d}")
    return times


def generate_time_slots(date: str, bookings: Iterable[Booking]) -> List[TimeSlot]:
    taken = {
        b.time
        for b in bookings
        if b.date == date and b.status != BookingStatus.CANCELLED
    }
    return [TimeSlot(time=t, available=t not in taken) for t in slot_times()]


def is_slot_available(date: str, time_: str, bookings: Iterable[Booking]) -> bool:
    # off-grid times are never bookable
    for slot in generate_time_slots(date, bookings):
        if slot.time == time_:
            return slot.available
    return False
