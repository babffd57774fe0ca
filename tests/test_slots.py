from models import Booking, BookingStatus
from slots import generate_time_slots, is_slot_available, slot_times

DAY = "2030-05-10"


def make_booking(id_, time_, status=BookingStatus.CONFIRMED, date=DAY):
    return Booking(
        id=id_, service_id="1", service_name="Degradê Neon",
        customer_name="Cliente", customer_phone="", date=date, time=time_, status=status,
    )


def test_full_day_is_available_without_bookings():
    slots = generate_time_slots(DAY, [])

    assert len(slots) == 18
    assert slots[0].time == "09:00"
    assert slots[-1].time == "17:30"
    assert all(s.available for s in slots)


def test_slots_are_strictly_ascending():
    times = [s.time for s in generate_time_slots(DAY, [])]
    assert times == sorted(times)
    assert len(set(times)) == len(times)
    assert "18:00" not in times


def test_confirmed_booking_blocks_its_slot_only():
    slots = generate_time_slots(DAY, [make_booking("a", "10:00")])

    taken = [s.time for s in slots if not s.available]
    assert taken == ["10:00"]


def test_cancelled_booking_frees_slot():
    slots = generate_time_slots(DAY, [make_booking("a", "10:00", BookingStatus.CANCELLED)])
    assert all(s.available for s in slots)


def test_completed_booking_still_blocks_slot():
    slots = generate_time_slots(DAY, [make_booking("a", "11:30", BookingStatus.COMPLETED)])
    assert [s.time for s in slots if not s.available] == ["11:30"]


def test_bookings_on_other_dates_are_ignored():
    slots = generate_time_slots(DAY, [make_booking("a", "10:00", date="2030-05-11")])
    assert all(s.available for s in slots)


def test_duplicate_bookings_make_slot_unavailable_once():
    bookings = [make_booking("a", "15:00"), make_booking("b", "15:00")]
    slots = generate_time_slots(DAY, bookings)

    assert len(slots) == 18
    assert [s.time for s in slots if not s.available] == ["15:00"]


def test_is_slot_available():
    bookings = [make_booking("a", "09:30")]

    assert is_slot_available(DAY, "09:00", bookings)
    assert not is_slot_available(DAY, "09:30", bookings)
    assert not is_slot_available(DAY, "09:15", bookings)
    assert not is_slot_available(DAY, "18:00", bookings)


def test_slot_times_grid():
    times = slot_times()
    assert times[:3] == ["09:00", "09:30", "10:00"]
    assert len(times) == 18
