from datetime import timedelta

import pytest

API = "/api/v1"


@pytest.fixture
def admin(make_user):
    return make_user(role="admin")


HALL_PAYLOAD = {
    "name": "Main Hall",
    "program_title": "Casablanca",
    "poster_url": "https://posters.example.com/casablanca.jpg",
    "rows": 10,
    "columns": 12,
}


class TestHallAdministration:
    def test_create_hall(self, client, admin, headers_for):
        response = client.post(f"{API}/admin/halls/", json=HALL_PAYLOAD, headers=headers_for(admin))
        assert response.status_code == 201
        body = response.json()
        assert body["rows"] == 10
        assert body["columns"] == 12

    def test_create_hall_requires_admin(self, client, make_user, headers_for):
        response = client.post(f"{API}/admin/halls/", json=HALL_PAYLOAD, headers=headers_for(make_user()))
        assert response.status_code == 403

    @pytest.mark.parametrize("rows,columns", [(0, 5), (31, 5), (5, 0), (5, 31)])
    def test_create_hall_dimensions_are_bounded(self, client, admin, headers_for, rows, columns):
        payload = {**HALL_PAYLOAD, "rows": rows, "columns": columns}
        response = client.post(f"{API}/admin/halls/", json=payload, headers=headers_for(admin))
        assert response.status_code == 400

    def test_update_program(self, client, admin, make_hall, add_reservation, make_user, headers_for, today):
        hall = make_hall()
        add_reservation(make_user(), hall, 1, 1, today + timedelta(days=1))
        response = client.patch(
            f"{API}/admin/halls/{hall.id}/program",
            json={"name": "Hall A", "program_title": "Sunrise", "poster_url": "sunrise.jpg"},
            headers=headers_for(admin),
        )
        assert response.status_code == 200
        assert response.json()["program_title"] == "Sunrise"

    def test_capacity_change_blocked_by_upcoming_reservations(
        self, client, admin, make_hall, add_reservation, make_user, headers_for, today
    ):
        hall = make_hall()
        add_reservation(make_user(), hall, 1, 1, today + timedelta(days=1))
        response = client.patch(
            f"{API}/admin/halls/{hall.id}/capacity", json={"rows": 5, "columns": 5}, headers=headers_for(admin)
        )
        assert response.status_code == 409

    def test_capacity_change_allowed_with_only_past_reservations(
        self, client, admin, make_hall, add_reservation, make_user, headers_for, today
    ):
        hall = make_hall()
        add_reservation(make_user(), hall, 1, 1, today - timedelta(days=3))
        response = client.patch(
            f"{API}/admin/halls/{hall.id}/capacity", json={"rows": 5, "columns": 6}, headers=headers_for(admin)
        )
        assert response.status_code == 200
        assert (response.json()["rows"], response.json()["columns"]) == (5, 6)

    def test_delete_blocked_by_any_reservation(
        self, client, admin, make_hall, add_reservation, make_user, headers_for, today
    ):
        hall = make_hall()
        add_reservation(make_user(), hall, 1, 1, today - timedelta(days=10))
        response = client.delete(f"{API}/admin/halls/{hall.id}", headers=headers_for(admin))
        assert response.status_code == 409

    def test_delete_hall(self, client, admin, make_hall, headers_for):
        hall = make_hall()
        response = client.delete(f"{API}/admin/halls/{hall.id}", headers=headers_for(admin))
        assert response.status_code == 200
        assert client.get(f"{API}/halls/{hall.id}", headers=headers_for(admin)).status_code == 404


class TestHallDirectory:
    def test_list_halls_with_occupancy(self, client, make_user, make_hall, add_reservation, headers_for, today):
        user = make_user()
        hall = make_hall(rows=3, columns=4)
        make_hall(name="Hall B")
        add_reservation(user, hall, 1, 1, today + timedelta(days=1))
        add_reservation(user, hall, 1, 2, today)
        add_reservation(user, hall, 1, 3, today - timedelta(days=1))

        response = client.get(f"{API}/halls/", headers=headers_for(user))

        assert response.status_code == 200
        first, second = response.json()
        assert first["name"] == "Hall A"
        assert first["total_capacity"] == 12
        assert first["reserved_seats"] == 2
        assert first["available_seats"] == 10
        assert second["reserved_seats"] == 0
        assert second["available_seats"] == 4


class TestUserAdministration:
    def test_list_excludes_caller(self, client, admin, make_user, headers_for):
        other = make_user()
        response = client.get(f"{API}/admin/users/", headers=headers_for(admin))
        assert response.status_code == 200
        assert [u["id"] for u in response.json()] == [str(other.id)]

    def test_deactivate_and_activate(self, client, admin, make_user, headers_for):
        user = make_user()
        response = client.patch(f"{API}/admin/users/{user.id}/deactivate", headers=headers_for(admin))
        assert response.status_code == 200
        assert response.json()["is_active"] is False
        assert client.get(f"{API}/auth/me", headers=headers_for(user)).status_code == 401

        response = client.patch(f"{API}/admin/users/{user.id}/activate", headers=headers_for(admin))
        assert response.json()["is_active"] is True
        assert client.get(f"{API}/auth/me", headers=headers_for(user)).status_code == 200

    def test_admins_cannot_be_deactivated(self, client, admin, make_user, headers_for):
        other_admin = make_user(role="admin")
        response = client.patch(f"{API}/admin/users/{other_admin.id}/deactivate", headers=headers_for(admin))
        assert response.status_code == 400

    def test_make_admin(self, client, admin, make_user, headers_for):
        user = make_user()
        response = client.patch(f"{API}/admin/users/{user.id}/make-admin", headers=headers_for(admin))
        assert response.status_code == 200
        assert response.json()["role"] == "admin"
        again = client.patch(f"{API}/admin/users/{user.id}/make-admin", headers=headers_for(admin))
        assert again.status_code == 400
