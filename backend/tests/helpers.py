"""Payload builders and auth helpers shared by the test modules."""

import copy
import os
from datetime import UTC, datetime, timedelta
from typing import Any

_VALID_PAYLOAD: dict[str, Any] = {
    "carousel": {
        "slides": [
            {
                "id": "s1",
                "imageUrl": "https://i/x.jpg",
                "altText": "x",
                "aspectRatio": "square",
            }
        ]
    },
    "text": {
        "heading": "H",
        "headingColor": "#000000",
        "description": "",
        "descriptionColor": "#000000",
    },
    "cta": {
        "primaryText": "Go",
        "primaryUrl": "/go",
        "primaryColor": "#000000",
        "primaryTextColor": "#ffffff",
    },
}


def make_payload(**sections: Any) -> dict[str, Any]:
    """Return a valid payload; keyword arguments merge into the named section."""
    payload = copy.deepcopy(_VALID_PAYLOAD)
    for section, changes in sections.items():
        payload[section].update(changes)
    return payload


def make_slide(**changes: Any) -> dict[str, Any]:
    slide = copy.deepcopy(_VALID_PAYLOAD["carousel"]["slides"][0])
    slide.update(changes)
    return slide


def payload_with_slide(**changes: Any) -> dict[str, Any]:
    return make_payload(carousel={"slides": [make_slide(**changes)]})


def auth_headers(key: str | None = None) -> dict:
    """Return Authorization headers carrying the test API key."""
    return {"Authorization": f"Bearer {key or os.environ['CONFIG_API_KEY']}"}


class StepClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class FrozenClock:
    """Clock that always returns the same instant."""

    def __init__(self, instant: datetime | None = None):
        self.instant = instant or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.instant
