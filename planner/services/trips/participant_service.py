from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from planner.core.cache import RedisCache
from planner.core.errors import ParticipantNotFoundError, TripNotFoundError
from planner.core.logger import logger
from planner.models.trips.participant import Participant
from planner.models.trips.trip_model import Trip
from planner.schemas.trip.participant import ParticipantListResponse, ParticipantOut
from planner.services.trips.trip_service import invalidate_trip_cache


async def confirm_participant(db: AsyncSession, cache: RedisCache, participant_id: UUID) -> Participant:
    participant = await db.get(Participant, participant_id)
    if not participant:
        raise ParticipantNotFoundError(participant_id)

    if participant.is_confirmed:
        logger.info(f"Participant {participant_id} already confirmed")
        return participant

    participant.is_confirmed = True
    await db.commit()
    await invalidate_trip_cache(cache, participant.trip_id)

    logger.info(f"Participant {participant_id} confirmed for trip {participant.trip_id}")
    return participant


async def get_trip_participants(db: AsyncSession, trip_id: UUID) -> ParticipantListResponse:
    if await db.get(Trip, trip_id) is None:
        raise TripNotFoundError(trip_id)

    result = await db.execute(
        select(Participant)
        .where(Participant.trip_id == trip_id)
        .order_by(Participant.is_owner.desc(), Participant.email)
    )
    participants = result.scalars().all()
    return ParticipantListResponse(
        participants=[ParticipantOut.model_validate(participant) for participant in participants]
    )
