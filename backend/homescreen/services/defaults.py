"""Built-in home-screen content used to seed storage and new editors."""

import copy
import secrets
import string
import time
from typing import Any

_ID_ALPHABET = string.digits + string.ascii_lowercase

_DEFAULT_PAYLOAD: dict[str, Any] = {
    "carousel": {
        "slides": [
            {
                "id": "slide-1",
                "imageUrl": "https://articles.hepper.com/wp-content/uploads/2022/10/Long-haired-cream-dachshund-running.jpg",  # noqa: E501
                "altText": "blonde dachshund running",
                "linkUrl": "#",
                "aspectRatio": "landscape",
            },
            {
                "id": "slide-2",
                "imageUrl": "https://www.borrowmydoggy.com/_next/image?url=https%3A%2F%2Fcdn.sanity.io%2Fimages%2F4ij0poqn%2Fproduction%2F2b1b8fc4b6cf03c02f869d67f3f16187396264c0-3999x3999.jpg%3Ffit%3Dmax%26auto%3Dformat&w=1080&q=75",  # noqa: E501
                "altText": "black and tan dachshund",
                "linkUrl": "##",
                "aspectRatio": "square",
            },
            {
                "id": "slide-3",
                "imageUrl": "https://t3.ftcdn.net/jpg/02/22/15/32/360_F_222153281_QGFYDh6V99PQyxaaOIf4FYLfUZK8ECfV.jpg",  # noqa: E501
                "altText": "reddish brown dachshund",
                "linkUrl": "###",
                "aspectRatio": "landscape",
            },
        ]
    },
    "text": {
        "heading": "Welcome to Our Store",
        "headingColor": "#000000",
        "description": (
            "Browse our curated collection of premium items designed to "
            "elevate your everyday experience."
        ),
        "descriptionColor": "#000000",
    },
    "cta": {
        "primaryText": "Shop Now",
        "primaryUrl": "/shop",
        "primaryColor": "#000000",
        "primaryTextColor": "#ffffff",
    },
}


def default_payload() -> dict[str, Any]:
    """Return a fresh copy of the default payload; callers may mutate it."""
    return copy.deepcopy(_DEFAULT_PAYLOAD)


def random_suffix(length: int = 9) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def generate_id(prefix: str) -> str:
    """Time-based id with a random suffix, e.g. ``slide-1718000000000-k3j9x0a1b``."""
    return f"{prefix}-{int(time.time() * 1000)}-{random_suffix()}"


def generate_slide_id() -> str:
    return generate_id("slide")
