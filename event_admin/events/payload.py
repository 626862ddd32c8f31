"""Build store payloads from submitted form values."""

from typing import Any, Mapping

# Always sent on insert, even when the submitted value is empty
REQUIRED_FIELDS = ("title", "description", "event_date", "event_time", "end_time")


def clean_submission(data: Mapping[str, Any]) -> dict[str, Any]:
    """Drop fields that are missing or empty so the store applies its defaults."""
    return {k: v for k, v in data.items() if v is not None and v != ""}


def build_create_payload(data: Mapping[str, Any], actor_id: int) -> dict[str, Any]:
    payload = clean_submission(data)
    payload["user_id"] = actor_id
    for field in REQUIRED_FIELDS:
        payload[field] = data.get(field)
    return payload


def build_update_payload(data: Mapping[str, Any], actor_id: int) -> dict[str, Any]:
    payload = clean_submission(data)
    payload["user_id"] = actor_id
    return payload
