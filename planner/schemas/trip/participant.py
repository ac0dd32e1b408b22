from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID


class ParticipantOut(BaseModel):
    id: UUID
    trip_id: UUID
    name: Optional[str] = None
    email: str
    is_owner: bool
    is_confirmed: bool

    model_config = {
        "from_attributes": True
    }


class ParticipantListResponse(BaseModel):
    participants: List[ParticipantOut]

    model_config = {
        "from_attributes": True
    }
