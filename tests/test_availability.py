from datetime import timedelta

from cinema.booking.availability import build_seat_matrix, compute_availability, reserved_seats
from cinema.booking.conflicts import find_conflicts
from cinema.booking.seat import Seat


def _reserved_cells(matrix):
    return {(cell.row, cell.column) for line in matrix for cell in line if cell.is_reserved}


def test_build_seat_matrix_shape_and_order():
    matrix = build_seat_matrix(3, 4, {Seat(2, 3)})
    assert len(matrix) == 3
    assert all(len(line) == 4 for line in matrix)
    assert [(c.row, c.column) for c in matrix[1]] == [(2, 1), (2, 2), (2, 3), (2, 4)]
    assert _reserved_cells(matrix) == {(2, 3)}


def test_empty_hall_is_all_free(db, make_hall, today):
    hall = make_hall(rows=2, columns=3)
    matrix = compute_availability(db, hall, today + timedelta(days=1))
    assert len(matrix) == 2
    assert _reserved_cells(matrix) == set()


def test_only_matching_hall_and_date_are_reserved(db, make_hall, make_user, add_reservation, today):
    hall = make_hall(rows=3, columns=3)
    other_hall = make_hall(name="Hall B")
    user = make_user()
    target = today + timedelta(days=2)
    add_reservation(user, hall, 1, 1, target)
    add_reservation(user, hall, 3, 2, target)
    add_reservation(user, hall, 2, 2, target + timedelta(days=1))
    add_reservation(user, other_hall, 1, 2, target)

    assert reserved_seats(db, hall.id, target) == {Seat(1, 1), Seat(3, 2)}
    assert _reserved_cells(compute_availability(db, hall, target)) == {(1, 1), (3, 2)}


def test_availability_is_idempotent(db, make_hall, make_user, add_reservation, today):
    hall = make_hall()
    target = today + timedelta(days=1)
    add_reservation(make_user(), hall, 2, 1, target)

    first = compute_availability(db, hall, target)
    second = compute_availability(db, hall, target)
    assert first == second


def test_find_conflicts_returns_taken_subset(db, make_hall, make_user, add_reservation, today):
    hall = make_hall(rows=3, columns=3)
    target = today + timedelta(days=1)
    user = make_user()
    add_reservation(user, hall, 1, 2, target)
    add_reservation(user, hall, 3, 3, target)

    conflicts = find_conflicts(db, hall.id, target, [Seat(1, 1), Seat(1, 2), Seat(2, 1)])
    assert conflicts == {Seat(1, 2)}


def test_find_conflicts_ignores_other_dates(db, make_hall, make_user, add_reservation, today):
    hall = make_hall()
    target = today + timedelta(days=1)
    add_reservation(make_user(), hall, 1, 1, target)

    assert find_conflicts(db, hall.id, target + timedelta(days=1), [Seat(1, 1)]) == set()
    assert find_conflicts(db, hall.id, target, []) == set()
