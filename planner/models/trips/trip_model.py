from sqlalchemy import Column, String, Boolean, DateTime, Uuid, func
from planner.core.database import Base
from sqlalchemy.orm import relationship
import uuid

class Trip(Base):
    __tablename__ = "trips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    destination = Column(String, nullable=False)
    starts_at = Column(DateTime(timezone=True), nullable=False)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    is_confirmed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    participants = relationship(
        "Participant",
        back_populates="trip",
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        """Convert Trip instance (with participants) to dictionary for caching"""
        return {
            "id": str(self.id),
            "destination": self.destination,
            "starts_at": self.starts_at.isoformat(),
            "ends_at": self.ends_at.isoformat(),
            "is_confirmed": self.is_confirmed,
            "participants": [
                participant.to_dict()
                for participant in sorted(self.participants, key=lambda p: (not p.is_owner, p.email))
            ],
        }
