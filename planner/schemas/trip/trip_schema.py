from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List
from datetime import datetime, timezone
from uuid import UUID
from planner.schemas.trip.participant import ParticipantOut

class TripCreate(BaseModel):
    destination: str = Field(min_length=4)
    starts_at: datetime
    ends_at: datetime
    owner_name: str
    owner_email: EmailStr
    emails_to_invite: List[EmailStr]

    @field_validator("starts_at", "ends_at")
    @classmethod
    def normalize_to_utc(cls, value: datetime) -> datetime:
        # Naive datetimes are taken as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class TripCreated(BaseModel):
    tripId: UUID


class TripResponse(BaseModel):
    id: UUID
    destination: str
    starts_at: datetime
    ends_at: datetime
    is_confirmed: bool
    participants: List[ParticipantOut]

    model_config = {
        "from_attributes": True
    }
