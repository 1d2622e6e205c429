import os
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Must be set before the application settings are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

from cinema.core.security import create_access_token, get_password_hash  # noqa: E402
from cinema.db.base import Base  # noqa: E402
from cinema.db.session import get_db, get_session_factory  # noqa: E402
from cinema.main import app  # noqa: E402
from cinema.models.hall import Hall  # noqa: E402
from cinema.models.reservation import Reservation  # noqa: E402
from cinema.models.user import User  # noqa: E402

DEFAULT_PASSWORD = "secret-password"


@pytest.fixture
def engine(tmp_path):
    # A file database so that concurrent threads see each other's commits
    engine = create_engine(
        f"sqlite:///{tmp_path / 'cinema_test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role="user", is_active=True, email=None):
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            password_hash=get_password_hash(DEFAULT_PASSWORD),
            full_name=f"User {counter['n']}",
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_hall(db):
    def _make(rows=2, columns=2, name="Hall A", program_title="Metropolis"):
        hall = Hall(
            name=name,
            program_title=program_title,
            poster_url=f"https://posters.example.com/{name.replace(' ', '-').lower()}.jpg",
            rows=rows,
            columns=columns,
        )
        db.add(hall)
        db.commit()
        db.refresh(hall)
        return hall

    return _make


@pytest.fixture
def add_reservation(db):
    """Insert a reservation row directly, bypassing the booking flow."""

    def _add(user, hall, row, column, on_date):
        reservation = Reservation(
            user_id=user.id,
            hall_id=hall.id,
            seat_row=row,
            seat_column=column,
            reservation_date=on_date,
        )
        db.add(reservation)
        db.commit()
        return reservation

    return _add


@pytest.fixture
def count_reservations(session_factory):
    def _count(**filters):
        session = session_factory()
        try:
            return session.query(Reservation).filter_by(**filters).count()
        finally:
            session.close()

    return _count


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user) -> dict:
    token = create_access_token(subject=str(user.id), role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers
