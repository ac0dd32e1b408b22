from uuid import UUID
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from planner.schemas.trip.trip_schema import TripCreate, TripCreated, TripResponse
from planner.schemas.trip.participant import ParticipantListResponse
from planner.core.config import Settings, get_settings
from planner.core.database import get_db
from planner.core.redis_lifecycle import get_cache
from planner.services.email_service import MailSender, get_mail_sender
from planner.services.trips.trip_service import TripService
from planner.services.trips.participant_service import get_trip_participants

router = APIRouter(prefix="/trips", tags=['Trips'])

async def get_trip_service(
    cache=Depends(get_cache),
    mail_sender: MailSender = Depends(get_mail_sender),
    app_settings: Settings = Depends(get_settings)
) -> TripService:
    return TripService(cache, mail_sender, app_settings)

@router.post("", response_model=TripCreated, status_code=status.HTTP_201_CREATED)
async def create_trip_route(
    trip: TripCreate,
    db: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    new_trip = await trip_service.create_trip(db, trip)
    return TripCreated(tripId=new_trip.id)

@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: UUID,
    db: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    return await trip_service.get_trip_by_id(db, trip_id)

@router.get("/{trip_id}/participants", response_model=ParticipantListResponse)
async def list_trip_participants(
    trip_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    return await get_trip_participants(db, trip_id)

@router.get("/{trip_id}/confirm", status_code=status.HTTP_302_FOUND)
async def confirm_trip_route(
    trip_id: UUID,
    db: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service)
):
    confirmation = await trip_service.confirm_trip(db, trip_id)
    web_base_url = trip_service.settings.WEB_BASE_URL
    if confirmation.already_confirmed:
        return RedirectResponse(f"{web_base_url}/trips/{trip_id}", status_code=status.HTTP_302_FOUND)
    return RedirectResponse(f"{web_base_url}/trips", status_code=status.HTTP_302_FOUND)
