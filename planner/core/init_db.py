from planner.core.database import engine, Base
from planner.models.trips.trip_model import Trip
from planner.models.trips.participant import Participant

async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
