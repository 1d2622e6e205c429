import uuid
from sqlalchemy import Column, Integer, Date, DateTime, Uuid, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from cinema.db.session import Base


class Reservation(Base):
    """One seat held by one user in one hall on one date."""

    __tablename__ = "reservations"
    __table_args__ = (
        # A seat can be held by at most one reservation per hall and date.
        UniqueConstraint(
            "hall_id", "seat_row", "seat_column", "reservation_date",
            name="uq_reservation_seat",
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    hall_id = Column(Uuid(as_uuid=True), ForeignKey("halls.id"), nullable=False, index=True)
    seat_row = Column(Integer, nullable=False)
    seat_column = Column(Integer, nullable=False)
    reservation_date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User")
    hall = relationship("Hall", back_populates="reservations")
