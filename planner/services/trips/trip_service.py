from datetime import datetime, timezone
from typing import Optional
from uuid import UUID
from pydantic import BaseModel
from redis.exceptions import RedisError
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from planner.core.config import Settings
from planner.core.cache import RedisCache
from planner.core.errors import InvalidDateRangeError, TripNotFoundError
from planner.core.logger import logger
from planner.models.trips.trip_model import Trip
from planner.models.trips.participant import Participant
from planner.schemas.trip.trip_schema import TripCreate, TripResponse
from planner.services.email_service import MailSender
from planner.services.notifications import DispatchReport, dispatch_all, dispatch_one
from planner.services.trips.confirmation_emails import (
    build_owner_confirmation,
    build_participant_invitation,
)


class TripConfirmation(BaseModel):
    trip_id: UUID
    already_confirmed: bool
    delivery: Optional[DispatchReport] = None


async def invalidate_trip_cache(cache: RedisCache, trip_id: UUID) -> None:
    """Drop the cached trip. A cache outage must not undo a committed change."""
    try:
        await cache.delete(cache.build_key("trips", "id", trip_id))
    except RedisError as e:
        logger.warning(f"Could not invalidate cache for trip {trip_id}: {e}")


def validate_trip_dates(starts_at: datetime, ends_at: datetime, now: Optional[datetime] = None) -> None:
    now = now or datetime.now(timezone.utc)
    if starts_at < now:
        raise InvalidDateRangeError("Invalid start date: starts_at is in the past", field="starts_at")
    if ends_at < now:
        raise InvalidDateRangeError("Invalid end date: ends_at is in the past", field="ends_at")
    if ends_at < starts_at:
        raise InvalidDateRangeError("Invalid end date: ends_at is before starts_at", field="ends_at")


class TripService:
    def __init__(self, cache: RedisCache, mail_sender: MailSender, app_settings: Settings):
        self.cache = cache
        self.mail_sender = mail_sender
        self.settings = app_settings

    async def create_trip(self, db: AsyncSession, trip_data: TripCreate) -> Trip:
        validate_trip_dates(trip_data.starts_at, trip_data.ends_at)

        owner = Participant(
            name=trip_data.owner_name,
            email=trip_data.owner_email,
            is_owner=True,
            is_confirmed=True,
        )
        invitees = [
            Participant(email=email, is_owner=False, is_confirmed=False)
            for email in trip_data.emails_to_invite
        ]
        new_trip = Trip(
            destination=trip_data.destination,
            starts_at=trip_data.starts_at,
            ends_at=trip_data.ends_at,
            is_confirmed=False,
            participants=[owner, *invitees],
        )
        db.add(new_trip)
        await db.commit()

        logger.info(f"Trip {new_trip.id} to {new_trip.destination} created with {len(invitees)} invitee(s)")

        await dispatch_one(
            self.mail_sender,
            build_owner_confirmation(new_trip, owner, self.settings.API_BASE_URL),
            label=f"trip {new_trip.id} owner confirmation",
        )
        return new_trip

    async def get_trip_by_id(self, db: AsyncSession, trip_id: UUID) -> TripResponse:
        cache_key = self.cache.build_key("trips", "id", trip_id)
        try:
            cached_trip = await self.cache.get(cache_key)
        except RedisError as e:
            logger.warning(f"Cache read failed for trip {trip_id}, using database: {e}")
            cached_trip = None

        if cached_trip:
            logger.info(f"Trip ID {trip_id} retrieved from cache")
            return TripResponse.model_validate(cached_trip)

        result = await db.execute(
            select(Trip)
            .options(selectinload(Trip.participants))
            .where(Trip.id == trip_id)
        )
        trip = result.scalar_one_or_none()

        if not trip:
            raise TripNotFoundError(trip_id)

        trip_dict = trip.to_dict()
        try:
            await self.cache.set(cache_key, trip_dict, expire=self.settings.TRIP_CACHE_TTL_SECONDS)
        except RedisError as e:
            logger.warning(f"Cache write failed for trip {trip_id}: {e}")

        logger.info(f"Trip ID {trip_id} retrieved from database")
        return TripResponse.model_validate(trip_dict)

    async def confirm_trip(self, db: AsyncSession, trip_id: UUID) -> TripConfirmation:
        trip = await db.get(Trip, trip_id)
        if not trip:
            raise TripNotFoundError(trip_id)

        if trip.is_confirmed:
            logger.info(f"Trip {trip_id} already confirmed")
            return TripConfirmation(trip_id=trip_id, already_confirmed=True)

        # Conditional write so two concurrent confirmations notify only once
        result = await db.execute(
            update(Trip)
            .where(Trip.id == trip_id, Trip.is_confirmed.is_(False))
            .values(is_confirmed=True)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        if result.rowcount == 0:
            logger.info(f"Trip {trip_id} was confirmed concurrently")
            return TripConfirmation(trip_id=trip_id, already_confirmed=True)

        await invalidate_trip_cache(self.cache, trip_id)
        logger.info(f"Trip {trip_id} confirmed")

        invitees = await db.execute(
            select(Participant).where(
                Participant.trip_id == trip_id,
                Participant.is_owner.is_(False),
            )
        )
        messages = [
            build_participant_invitation(trip, participant, self.settings.API_BASE_URL)
            for participant in invitees.scalars().all()
        ]
        report = await dispatch_all(
            self.mail_sender,
            messages,
            label=f"trip {trip_id} invitations",
        )
        return TripConfirmation(trip_id=trip_id, already_confirmed=False, delivery=report)
