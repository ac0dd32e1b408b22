from sqlalchemy import Column, ForeignKey, DateTime, String, Boolean, Uuid, Index, func
from sqlalchemy.orm import relationship
from planner.core.database import Base
import uuid


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id = Column(Uuid, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String, nullable=True)
    email = Column(String, nullable=False)
    is_owner = Column(Boolean, nullable=False, default=False)
    is_confirmed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # One owner per trip
    __table_args__ = (
        Index(
            "uq_participants_trip_owner",
            "trip_id",
            unique=True,
            postgresql_where=is_owner.is_(True),
            sqlite_where=is_owner.is_(True),
        ),
    )

    trip = relationship("Trip", back_populates="participants")

    def to_dict(self):
        return {
            "id": str(self.id),
            "trip_id": str(self.trip_id),
            "name": self.name,
            "email": self.email,
            "is_owner": self.is_owner,
            "is_confirmed": self.is_confirmed,
        }
