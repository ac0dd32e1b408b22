import httpx
from sqlalchemy import select

from planner.core.config import Settings
from planner.models import Participant
from planner.services.email_service import get_mail_sender

CUSTOM = Settings(
    _env_file=None,
    DATABASE_URL="sqlite+aiosqlite://",
    REDIS_URL="redis://localhost:6379/14",
    SMTP_HOST="smtp.custom.example.com",
    SMTP_PORT=2525,
    SMTP_USE_SSL=False,
    TRIP_CACHE_TTL_SECONDS=90,
    API_BASE_URL="http://custom.api",
    WEB_BASE_URL="http://custom.web",
)


async def test_created_app_uses_its_own_urls(build_app, mail_sender, trip_payload):
    app = build_app(CUSTOM)
    assert app.state.settings is CUSTOM

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/trips", json=trip_payload())
        trip_id = created.json()["tripId"]
        confirmed = await client.get(f"/trips/{trip_id}/confirm")
        again = await client.get(f"/trips/{trip_id}/confirm")

    assert confirmed.status_code == 302
    assert confirmed.headers["location"] == "http://custom.web/trips"
    assert again.headers["location"] == f"http://custom.web/trips/{trip_id}"

    owner_mail, invitee_mail = mail_sender.sent
    assert f"http://custom.api/trips/{trip_id}/confirm" in owner_mail.html
    assert "http://custom.api/participants/" in invitee_mail.html
    assert "http://api.test" not in owner_mail.html + invitee_mail.html


async def test_trip_details_are_cached_with_configured_ttl(build_app, cache, create_trip):
    trip_id = await create_trip()

    transport = httpx.ASGITransport(app=build_app(CUSTOM))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(f"/trips/{trip_id}")

    assert response.status_code == 200
    assert cache.expiry[f"trips:id:{trip_id}"] == 90


async def test_participant_redirect_uses_app_settings(build_app, create_trip, session_factory):
    trip_id = await create_trip()
    async with session_factory() as session:
        bob = (
            await session.execute(select(Participant).where(Participant.email == "bob@example.com"))
        ).scalar_one()

    transport = httpx.ASGITransport(app=build_app(CUSTOM))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(f"/participants/{bob.id}/confirm")

    assert response.headers["location"] == f"http://custom.web/trips/{trip_id}"


def test_mail_sender_is_built_from_given_settings():
    sender = get_mail_sender(CUSTOM)

    assert (sender.host, sender.port) == ("smtp.custom.example.com", 2525)
    assert sender.use_ssl is False
    assert sender.sender_email == CUSTOM.MAIL_FROM_ADDRESS
