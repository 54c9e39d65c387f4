import threading
from datetime import date
from decimal import Decimal

import pytest

from hotelms.models import Booking, GuestProfile, Room
from hotelms.models.base import BookingStatus, PaymentStatus, RoomStatus
from hotelms.schemas.booking import BookingCreate, BookingFilters, BookingUpdate
from hotelms.services.booking import BookingService, calculate_stay_price, can_transition
from hotelms.services.common.errors import ConflictError, NotFoundError, ValidationError
from hotelms.services.common.permissions import ForbiddenError, PermissionDenied
from hotelms.utils.date_utils import today_utc

from .conftest import TODAY


def stay(room_id: str, check_in: date, check_out: date, **kwargs) -> BookingCreate:
    return BookingCreate(room_id=room_id, check_in_date=check_in, check_out_date=check_out, **kwargs)


@pytest.fixture
def service(db, settings) -> BookingService:
    return BookingService(db, settings=settings, clock=lambda: TODAY)


@pytest.fixture
def scenario_a(service, guest, room_id) -> Booking:
    return service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))


# ==================== Scenarios ====================

def test_scenario_a_prices_two_nights(scenario_a, guest, room_id):
    assert scenario_a.nights == 2
    assert scenario_a.total_price == Decimal("200.00")
    assert scenario_a.status == BookingStatus.CONFIRMED
    assert scenario_a.payment_status == PaymentStatus.PENDING
    assert scenario_a.user_id == guest.user_id
    assert scenario_a.room_id == room_id


def test_scenario_b_overlapping_booking_rejected(service, scenario_a, other_guest, room_id, db):
    with pytest.raises(ConflictError) as exc_info:
        service.create_booking(other_guest, stay(room_id, date(2024, 6, 2), date(2024, 6, 4)))
    assert exc_info.value.details["conflicting_bookings"] == [scenario_a.id]
    assert db.query(Booking).count() == 1


def test_scenario_c_cancel_frees_room_for_new_booking(service, scenario_a, guest, other_guest, room_id, db):
    cancelled = service.cancel_booking(scenario_a.id, guest)

    assert cancelled.status == BookingStatus.CANCELLED
    assert not cancelled.is_active
    assert cancelled.cancelled_at is not None
    assert db.get(Room, room_id).is_available is True

    booking = service.create_booking(other_guest, stay(room_id, date(2024, 6, 2), date(2024, 6, 4)))
    assert booking.status == BookingStatus.CONFIRMED


def test_scenario_d_non_owner_cannot_cancel(service, scenario_a, other_guest):
    with pytest.raises(ForbiddenError):
        service.cancel_booking(scenario_a.id, other_guest)
    assert scenario_a.status == BookingStatus.CONFIRMED


def test_back_to_back_booking_accepted(service, scenario_a, other_guest, room_id):
    booking = service.create_booking(other_guest, stay(room_id, date(2024, 6, 3), date(2024, 6, 5)))
    assert booking.check_in_date == scenario_a.check_out_date


# ==================== Validation ====================

@pytest.mark.parametrize(
    "check_in, check_out",
    [(date(2024, 6, 3), date(2024, 6, 3)), (date(2024, 6, 5), date(2024, 6, 3))],
)
def test_invalid_date_range_rejected(service, guest, room_id, check_in, check_out):
    with pytest.raises(ValidationError) as exc_info:
        service.create_booking(guest, stay(room_id, check_in, check_out))
    assert exc_info.value.field == "check_out_date"


def test_stay_longer_than_limit_rejected(service, guest, room_id, settings):
    with pytest.raises(ValidationError):
        service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 7, 15)))


def test_guests_over_room_capacity_rejected(service, guest, room_id):
    with pytest.raises(ValidationError) as exc_info:
        service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3), guests=3))
    assert exc_info.value.field == "guests"


def test_guest_count_out_of_bounds_rejected(service, guest, room_id):
    with pytest.raises(ValidationError):
        service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3), guests=11))


def test_past_check_in_rejected_when_not_allowed(db, settings, guest, room_id):
    strict = settings.model_copy(update={"BOOKING_ALLOW_PAST_DATES": False})
    service = BookingService(db, settings=strict, clock=lambda: date(2024, 6, 10))
    with pytest.raises(ValidationError) as exc_info:
        service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))
    assert exc_info.value.field == "check_in_date"


def test_unknown_room_not_found(service, guest):
    with pytest.raises(NotFoundError):
        service.create_booking(guest, stay("missing-room", date(2024, 6, 1), date(2024, 6, 3)))


def test_unavailable_room_rejected(service, seed, guest):
    room_id = seed.room("R201", is_available=False)
    with pytest.raises(ConflictError):
        service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))


def test_room_under_maintenance_rejected(service, seed, guest):
    room_id = seed.room("R202", status=RoomStatus.MAINTENANCE)
    with pytest.raises(ConflictError):
        service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))


# ==================== Pricing & side effects ====================

def test_price_is_nights_times_rate():
    nights, total = calculate_stay_price(date(2024, 6, 1), date(2024, 6, 4), Decimal("89.99"))
    assert nights == 3
    assert total == Decimal("269.97")


def test_client_supplied_price_is_ignored(service, guest, room_id):
    request = BookingCreate.model_validate(
        {
            "room_id": room_id,
            "check_in_date": "2024-06-01",
            "check_out_date": "2024-06-03",
            "total_price": 1,
        }
    )
    booking = service.create_booking(guest, request)
    assert booking.total_price == Decimal("200.00")


def test_booking_covering_today_marks_room_unavailable(db, settings, guest, room_id):
    service = BookingService(db, settings=settings, clock=lambda: date(2024, 6, 2))
    service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))
    assert db.get(Room, room_id).is_available is False


def test_future_booking_leaves_room_available(scenario_a, db, room_id):
    assert db.get(Room, room_id).is_available is True


def test_first_booking_creates_guest_profile(scenario_a, db, guest):
    profile = db.query(GuestProfile).filter_by(user_id=guest.user_id).one()
    assert profile.full_name == "Alice Guest"
    assert profile.email == "guest@example.com"


def test_initial_status_follows_settings(db, settings, guest, room_id):
    pending = settings.model_copy(update={"BOOKING_INITIAL_STATUS": "pending"})
    service = BookingService(db, settings=pending, clock=lambda: TODAY)
    booking = service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))
    assert booking.status == BookingStatus.PENDING


# ==================== Cancellation ====================

def test_cancel_twice_rejected(service, scenario_a, guest):
    service.cancel_booking(scenario_a.id, guest)
    with pytest.raises(ConflictError):
        service.cancel_booking(scenario_a.id, guest)


def test_cancel_completed_booking_rejected(service, scenario_a, guest, staff):
    service.update_booking_status(scenario_a.id, BookingStatus.COMPLETED, staff)
    with pytest.raises(ConflictError):
        service.cancel_booking(scenario_a.id, guest)


def test_staff_can_cancel_any_booking(service, scenario_a, staff):
    assert service.cancel_booking(scenario_a.id, staff).status == BookingStatus.CANCELLED


def test_unknown_booking_looks_forbidden_to_guests(service, scenario_a, guest, other_guest):
    with pytest.raises(PermissionDenied):
        service.cancel_booking("missing", guest)
    with pytest.raises(PermissionDenied):
        service.get_booking("missing", other_guest)
    with pytest.raises(PermissionDenied):
        service.get_booking(scenario_a.id, other_guest)


def test_unknown_booking_not_found_for_staff(service, staff):
    with pytest.raises(NotFoundError):
        service.cancel_booking("missing", staff)
    with pytest.raises(NotFoundError):
        service.get_booking("missing", staff)


# ==================== Editing ====================

def test_booking_can_move_over_its_own_dates(service, scenario_a, staff):
    booking = service.update_booking(
        scenario_a.id,
        BookingUpdate(check_in_date=date(2024, 6, 2), check_out_date=date(2024, 6, 5)),
        staff,
    )
    assert (booking.check_in_date, booking.check_out_date) == (date(2024, 6, 2), date(2024, 6, 5))
    assert booking.total_price == Decimal("300.00")
    assert booking.room_id == scenario_a.room_id


def test_booking_cannot_move_onto_another_booking(service, scenario_a, other_guest, room_id, staff):
    later = service.create_booking(other_guest, stay(room_id, date(2024, 6, 10), date(2024, 6, 12)))

    with pytest.raises(ConflictError) as exc_info:
        service.update_booking(
            scenario_a.id,
            BookingUpdate(check_in_date=date(2024, 6, 9), check_out_date=date(2024, 6, 11)),
            staff,
        )
    assert exc_info.value.details["conflicting_bookings"] == [later.id]
    assert scenario_a.check_in_date == date(2024, 6, 1)


def test_booking_edit_requires_staff(service, scenario_a, guest):
    with pytest.raises(PermissionDenied):
        service.update_booking(scenario_a.id, BookingUpdate(check_out_date=date(2024, 6, 4)), guest)


def test_cancelled_booking_cannot_be_edited(service, scenario_a, guest, admin):
    service.cancel_booking(scenario_a.id, guest)
    with pytest.raises(ConflictError):
        service.update_booking(scenario_a.id, BookingUpdate(check_out_date=date(2024, 6, 4)), admin)


def test_booking_edit_checks_guest_count(service, scenario_a, staff):
    with pytest.raises(ValidationError) as exc_info:
        service.update_booking(scenario_a.id, BookingUpdate(guests=3), staff)
    assert exc_info.value.field == "guests"

    booking = service.update_booking(scenario_a.id, BookingUpdate(children=1, guests=2), staff)
    assert (booking.adults, booking.children, booking.guests) == (1, 1, 2)


def test_booking_edit_moves_room_flag_with_stay(db, settings, guest, staff, room_id):
    service = BookingService(db, settings=settings, clock=lambda: date(2024, 6, 2))
    booking = service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))
    assert db.get(Room, room_id).is_available is False

    service.update_booking(
        booking.id,
        BookingUpdate(check_in_date=date(2024, 6, 20), check_out_date=date(2024, 6, 22)),
        staff,
    )
    assert db.get(Room, room_id).is_available is True


def test_default_clock_uses_utc_date(db, settings):
    assert BookingService(db, settings=settings)._today() == today_utc()


# ==================== State machine ====================

@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (BookingStatus.PENDING, BookingStatus.CONFIRMED, True),
        (BookingStatus.PENDING, BookingStatus.CANCELLED, True),
        (BookingStatus.PENDING, BookingStatus.COMPLETED, False),
        (BookingStatus.CONFIRMED, BookingStatus.COMPLETED, True),
        (BookingStatus.CONFIRMED, BookingStatus.CANCELLED, True),
        (BookingStatus.CONFIRMED, BookingStatus.PENDING, False),
        (BookingStatus.CANCELLED, BookingStatus.CONFIRMED, False),
        (BookingStatus.CANCELLED, BookingStatus.PENDING, False),
        (BookingStatus.COMPLETED, BookingStatus.CONFIRMED, False),
        (BookingStatus.COMPLETED, BookingStatus.CANCELLED, False),
    ],
)
def test_transition_table(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_cancelled_booking_cannot_be_reopened(service, scenario_a, guest, admin):
    service.cancel_booking(scenario_a.id, guest)
    with pytest.raises(ConflictError):
        service.update_booking_status(scenario_a.id, BookingStatus.CONFIRMED, admin)


def test_completing_booking_frees_room(db, settings, guest, staff, room_id):
    service = BookingService(db, settings=settings, clock=lambda: date(2024, 6, 2))
    booking = service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))
    assert db.get(Room, room_id).is_available is False

    service.update_booking_status(booking.id, BookingStatus.COMPLETED, staff)
    assert db.get(Room, room_id).is_available is True


def test_confirming_pending_booking_covering_today_blocks_room(db, settings, guest, staff, room_id):
    pending = settings.model_copy(update={"BOOKING_INITIAL_STATUS": "pending"})
    service = BookingService(db, settings=pending, clock=lambda: date(2024, 6, 1))
    booking = service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))
    service.rooms.set_availability(db.get(Room, room_id), True)
    db.commit()

    service.update_booking_status(booking.id, BookingStatus.CONFIRMED, staff)
    assert db.get(Room, room_id).is_available is False


def test_payment_status_updated_alone(service, scenario_a, admin):
    booking = service.update_booking_status(scenario_a.id, None, admin, payment_status=PaymentStatus.PAID)
    assert booking.payment_status == PaymentStatus.PAID
    assert booking.status == BookingStatus.CONFIRMED


def test_guest_cannot_update_status(service, scenario_a, guest):
    with pytest.raises(PermissionDenied):
        service.update_booking_status(scenario_a.id, BookingStatus.COMPLETED, guest)


def test_unknown_status_value_rejected(service, scenario_a, admin):
    with pytest.raises(ValidationError):
        service.update_booking_status(scenario_a.id, "checked-in", admin)


# ==================== Delete & queries ====================

def test_admin_deletes_booking_and_room_is_freed(db, settings, guest, admin, room_id):
    service = BookingService(db, settings=settings, clock=lambda: date(2024, 6, 2))
    booking = service.create_booking(guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))

    service.delete_booking(booking.id, admin)

    assert db.get(Booking, booking.id) is None
    assert db.get(Room, room_id).is_available is True


def test_staff_cannot_delete_booking(service, scenario_a, staff):
    with pytest.raises(PermissionDenied):
        service.delete_booking(scenario_a.id, staff)


def test_owner_and_staff_can_view_booking(service, scenario_a, guest, staff, other_guest):
    assert service.get_booking(scenario_a.id, guest).id == scenario_a.id
    assert service.get_booking(scenario_a.id, staff).id == scenario_a.id
    with pytest.raises(PermissionDenied):
        service.get_booking(scenario_a.id, other_guest)


def test_my_bookings_only_lists_own(service, scenario_a, seed, guest, other_guest):
    room_id = seed.room("R301")
    service.create_booking(other_guest, stay(room_id, date(2024, 6, 1), date(2024, 6, 2)))

    assert [b.id for b in service.list_my_bookings(guest)] == [scenario_a.id]
    assert len(service.list_my_bookings(other_guest)) == 1


def test_list_bookings_filters(service, scenario_a, seed, guest, staff):
    room_id = seed.room("R302")
    later = service.create_booking(guest, stay(room_id, date(2024, 7, 10), date(2024, 7, 12)))
    service.cancel_booking(later.id, guest)

    assert len(service.list_bookings(staff)) == 2
    cancelled = service.list_bookings(staff, BookingFilters(status=BookingStatus.CANCELLED))
    assert [b.id for b in cancelled] == [later.id]
    in_june = service.list_bookings(staff, BookingFilters(from_date=date(2024, 6, 1), to_date=date(2024, 6, 30)))
    assert [b.id for b in in_june] == [scenario_a.id]
    by_room = service.list_bookings(staff, BookingFilters(room_id=room_id))
    assert [b.id for b in by_room] == [later.id]


def test_list_bookings_requires_staff(service, guest):
    with pytest.raises(PermissionDenied):
        service.list_bookings(guest)


# ==================== Concurrency ====================

def test_concurrent_creates_for_same_dates_commit_once(session_factory, settings, seed):
    room_id = seed.room("R900")
    principals = [seed.user(), seed.user()]
    barrier = threading.Barrier(len(principals))
    outcomes = []
    lock = threading.Lock()

    def attempt(principal):
        session = session_factory()
        try:
            service = BookingService(session, settings=settings, clock=lambda: TODAY)
            barrier.wait()
            service.create_booking(principal, stay(room_id, date(2024, 6, 1), date(2024, 6, 3)))
            result = "created"
        except ConflictError:
            result = "conflict"
        finally:
            session.close()
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt, args=(p,)) for p in principals]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert sorted(outcomes) == ["conflict", "created"]
    with session_factory() as session:
        assert session.query(Booking).filter_by(room_id=room_id).count() == 1
