"""Structural and semantic checks for home-screen configuration payloads.

Nothing in this module raises on malformed input. Every problem is reported
as a human-readable string and all applicable errors are collected, so the
editor can show the full list at once.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
# Relative paths and placeholder anchors ("#", "##") are accepted on purpose
# so draft content can be saved before real links exist.
URL_RE = re.compile(r"^(https?://|/|#)")

ASPECT_RATIOS = ("portrait", "landscape", "square")


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=list(errors))


def is_valid_hex_color(value: Any) -> bool:
    """True for ``#RRGGBB`` strings; shorthand and named colors are rejected."""
    return isinstance(value, str) and HEX_COLOR_RE.match(value) is not None


def is_valid_url(value: Any) -> bool:
    return isinstance(value, str) and URL_RE.match(value) is not None


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _validate_slide(slide: Any, position: int) -> list[str]:
    prefix = f"Slide {position}"
    if not isinstance(slide, Mapping):
        return [f"{prefix}: must be an object"]

    errors: list[str] = []

    if not _is_non_empty_str(slide.get("id")):
        errors.append(f"{prefix}: id is required and must be a string")

    image_url = slide.get("imageUrl")
    if not _is_non_empty_str(image_url):
        errors.append(f"{prefix}: imageUrl is required and must be a string")
    elif not is_valid_url(image_url):
        errors.append(f"{prefix}: imageUrl must be a valid URL")

    if not _is_non_empty_str(slide.get("altText")):
        errors.append(f"{prefix}: altText is required and must be a string")

    # Only an absent key is exempt; an explicit null is checked like any other value.
    link_url = slide.get("linkUrl")
    if "linkUrl" in slide and link_url != "" and not is_valid_url(link_url):
        errors.append(f"{prefix}: linkUrl must be a valid URL if provided")

    if slide.get("aspectRatio") not in ASPECT_RATIOS:
        errors.append(f"{prefix}: aspectRatio must be 'portrait', 'landscape', or 'square'")

    return errors


def _validate_carousel(carousel: Mapping[str, Any]) -> list[str]:
    slides = carousel.get("slides")
    if not isinstance(slides, list):
        return ["Carousel slides must be an array"]

    errors: list[str] = []
    for position, slide in enumerate(slides, start=1):
        errors.extend(_validate_slide(slide, position))
    return errors


def _validate_text(text: Mapping[str, Any]) -> list[str]:
    errors: list[str] = []

    if not isinstance(text.get("heading"), str):
        errors.append("Text heading must be a string")

    if not is_valid_hex_color(text.get("headingColor")):
        errors.append("Text headingColor must be a valid hex color (e.g., #000000)")

    if not isinstance(text.get("description"), str):
        errors.append("Text description must be a string")

    if not is_valid_hex_color(text.get("descriptionColor")):
        errors.append("Text descriptionColor must be a valid hex color (e.g., #000000)")

    return errors


def _validate_cta(cta: Mapping[str, Any]) -> list[str]:
    errors: list[str] = []

    primary_text = cta.get("primaryText")
    if not isinstance(primary_text, str) or not primary_text.strip():
        errors.append("CTA primaryText is required and must be a non-empty string")

    primary_url = cta.get("primaryUrl")
    if not isinstance(primary_url, str) or not primary_url.strip():
        errors.append("CTA primaryUrl is required")
    elif not is_valid_url(primary_url):
        errors.append("CTA primaryUrl must be a valid URL")

    if not is_valid_hex_color(cta.get("primaryColor")):
        errors.append("CTA primaryColor must be a valid hex color (e.g., #000000)")

    if not is_valid_hex_color(cta.get("primaryTextColor")):
        errors.append("CTA primaryTextColor must be a valid hex color (e.g., #ffffff)")

    return errors


_SECTIONS = (
    ("carousel", "Carousel", _validate_carousel),
    ("text", "Text", _validate_text),
    ("cta", "CTA", _validate_cta),
)


def validate_payload(payload: Any) -> ValidationResult:
    """Validate a ConfigPayload (the ``data`` portion of a stored config)."""
    if not isinstance(payload, Mapping):
        return ValidationResult.from_errors(["Configuration payload is required"])

    errors: list[str] = []
    for key, label, check in _SECTIONS:
        section = payload.get(key)
        if section is None:
            errors.append(f"{label} config is required")
        elif not isinstance(section, Mapping):
            errors.append(f"{label} config must be an object")
        else:
            errors.extend(check(section))

    return ValidationResult.from_errors(errors)


def validate_stored_config(record: Any) -> ValidationResult:
    """Validate a full on-disk record: envelope metadata plus its payload."""
    if not isinstance(record, Mapping):
        return ValidationResult.from_errors(["Configuration is required"])

    errors: list[str] = []

    if not _is_non_empty_str(record.get("id")):
        errors.append("Configuration id is required and must be a string")

    schema_version = record.get("schemaVersion")
    if (
        isinstance(schema_version, bool)
        or not isinstance(schema_version, (int, float))
        or schema_version < 1
    ):
        errors.append("Configuration schemaVersion must be a positive number")

    if not _is_non_empty_str(record.get("updatedAt")):
        errors.append("Configuration updatedAt is required")

    if not _is_non_empty_str(record.get("createdAt")):
        errors.append("Configuration createdAt is required")

    data = record.get("data")
    if data is None:
        errors.append("Configuration data payload is required")
    else:
        errors.extend(validate_payload(data).errors)

    return ValidationResult.from_errors(errors)


def is_stored_config_shape(value: Any) -> bool:
    return isinstance(value, Mapping) and all(k in value for k in ("data", "id", "schemaVersion"))


def is_payload_shape(value: Any) -> bool:
    return isinstance(value, Mapping) and all(k in value for k in ("carousel", "text", "cta"))


def validate_import_data(value: Any) -> ValidationResult:
    """Validate an uploaded document that may be wrapped or bare.

    Users export either the StoredConfig envelope or just the payload and
    expect both to import.
    """
    if not isinstance(value, Mapping):
        return ValidationResult.from_errors(["Import data must be a valid object"])

    if is_stored_config_shape(value):
        return validate_stored_config(value)

    if is_payload_shape(value):
        return validate_payload(value)

    return ValidationResult.from_errors(
        ["Import data must contain carousel, text, and cta configurations"]
    )
