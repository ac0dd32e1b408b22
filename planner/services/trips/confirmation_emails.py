from html import escape
from planner.models.trips.trip_model import Trip
from planner.models.trips.participant import Participant
from planner.services.email_service import MailMessage
from planner.utils.dates import format_date, LONG_DATE, NUMERIC_DATE

FOOTER = (
    '<p style="font-size: 12px; text-align: center">'
    "If you don't know what this is about, we apologize for the confusion. "
    "Please just ignore this email.</p>"
)

BUTTON_STYLE = (
    "padding: 10px 20px; background-color: rgb(0, 132, 255); "
    "text-decoration: none; color: white; border-radius: 5px;"
)


def generate_trip_confirm_link(base_url: str, trip_id) -> str:
    return f"{base_url}/trips/{trip_id}/confirm"


def generate_participant_confirm_link(base_url: str, participant_id) -> str:
    return f"{base_url}/participants/{participant_id}/confirm"


def build_owner_confirmation(trip: Trip, owner: Participant, base_url: str) -> MailMessage:
    """
    Mail asking the owner to confirm the trip they just created.
    """
    link = generate_trip_confirm_link(base_url, trip.id)
    destination = escape(trip.destination)
    html = f"""
    <div style="font-family: Arial, Helvetica, sans-serif; width: 500px; margin: 0 auto; padding: 10px 30px;">
      <h2>Hello {escape(owner.name or "")}, we received your request!</h2>
      <h4>You asked to create a trip to <strong>{destination}</strong></h4>
      <p>
        Departure date <b>{format_date(trip.starts_at, NUMERIC_DATE)}</b><br />
        Return date <b>{format_date(trip.ends_at, NUMERIC_DATE)}</b>
      </p>
      <p>To confirm the trip, click the link below</p>
      <a href="{link}" style="{BUTTON_STYLE}">Confirm your trip</a>
      {FOOTER}
    </div>
    """.strip()

    return MailMessage(
        to_email=owner.email,
        to_name=owner.name,
        subject=f"Confirm your trip to {trip.destination}",
        html=html,
    )


def build_participant_invitation(trip: Trip, participant: Participant, base_url: str) -> MailMessage:
    """
    Mail inviting a participant to confirm their place on a confirmed trip.
    """
    link = generate_participant_confirm_link(base_url, participant.id)
    html = f"""
    <div style="font-family: Arial, Helvetica, sans-serif; width: 500px; margin: 0 auto; padding: 10px 30px;">
      <h3>You have been invited to a trip to <strong>{escape(trip.destination)}</strong></h3>
      <p>
        Departure date <b>{format_date(trip.starts_at, LONG_DATE)}</b><br />
        Return date <b>{format_date(trip.ends_at, LONG_DATE)}</b>
      </p>
      <p style="text-align: center">Click the button below to confirm your presence</p>
      <a href="{link}" style="{BUTTON_STYLE}">Confirm trip</a>
      {FOOTER}
    </div>
    """.strip()

    return MailMessage(
        to_email=participant.email,
        to_name=participant.name,
        subject=f"Confirm your trip to {trip.destination}",
        html=html,
    )
