from uuid import uuid4

from planner.core.errors import (
    DeliveryFailureError,
    InvalidDateRangeError,
    ParticipantNotFoundError,
    PlannerError,
    TripNotFoundError,
)


def test_error_codes_map_to_statuses():
    trip_id = uuid4()
    assert TripNotFoundError(trip_id).status_code == 404
    assert ParticipantNotFoundError(trip_id).status_code == 404
    assert InvalidDateRangeError("bad", field="starts_at").status_code == 400


def test_to_dict_includes_details_only_when_present():
    assert PlannerError("boom").to_dict() == {"detail": "boom", "code": "INTERNAL_ERROR"}

    body = InvalidDateRangeError("Invalid start date", field="starts_at").to_dict()
    assert body == {
        "detail": "Invalid start date",
        "code": "INVALID_DATE_RANGE",
        "details": {"field": "starts_at"},
    }


def test_delivery_failure_keeps_recipient():
    err = DeliveryFailureError("bob@example.com", "timed out")

    assert isinstance(err, PlannerError)
    assert err.recipient == "bob@example.com"
    assert "timed out" in err.message
