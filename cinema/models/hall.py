import uuid
from sqlalchemy import Column, String, Integer, DateTime, Uuid, CheckConstraint, func
from sqlalchemy.orm import relationship
from cinema.db.session import Base


class Hall(Base):
    __tablename__ = "halls"
    __table_args__ = (
        CheckConstraint("row_count BETWEEN 1 AND 30", name="ck_hall_rows"),
        CheckConstraint("column_count BETWEEN 1 AND 30", name="ck_hall_columns"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    program_title = Column(String(255), nullable=False)
    poster_url = Column(String(255), nullable=False)
    rows = Column("row_count", Integer, nullable=False)
    columns = Column("column_count", Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    reservations = relationship("Reservation", back_populates="hall")

    @property
    def total_capacity(self) -> int:
        return self.rows * self.columns
