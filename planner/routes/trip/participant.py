from uuid import UUID
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from planner.core.cache import RedisCache
from planner.core.config import Settings, get_settings
from planner.core.database import get_db
from planner.core.redis_lifecycle import get_cache
from planner.services.trips.participant_service import confirm_participant

router = APIRouter(prefix="/participants", tags=["Participants"])

@router.get("/{participant_id}/confirm", status_code=status.HTTP_302_FOUND)
async def confirm_participant_route(
    participant_id: UUID,
    db: AsyncSession = Depends(get_db),
    cache: RedisCache = Depends(get_cache),
    app_settings: Settings = Depends(get_settings)
):
    participant = await confirm_participant(db, cache, participant_id)
    return RedirectResponse(
        f"{app_settings.WEB_BASE_URL}/trips/{participant.trip_id}",
        status_code=status.HTTP_302_FOUND
    )
