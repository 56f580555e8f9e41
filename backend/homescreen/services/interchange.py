"""Export/import of configuration documents.

Exports are always StoredConfig-shaped. Imports accept either that wrapped
shape or a bare payload, since users move both around.
"""

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from homescreen.services.config_store import (
    CURRENT_SCHEMA_VERSION,
    DEFAULT_CONFIG_ID,
    format_timestamp,
)
from homescreen.services.validation import is_stored_config_shape, validate_import_data

_STRUCTURE_ERROR = (
    "Invalid configuration file: must contain carousel (with a slides array), text, and cta"
)


@dataclass(frozen=True)
class ImportResult:
    success: bool
    payload: dict[str, Any] | None = None
    errors: list[str] = field(default_factory=list)


def build_export_document(
    payload: Mapping[str, Any],
    config_id: str = DEFAULT_CONFIG_ID,
    created_at: str | None = None,
) -> dict[str, Any]:
    now = format_timestamp(datetime.now(UTC))
    return {
        "id": config_id,
        "schemaVersion": CURRENT_SCHEMA_VERSION,
        "createdAt": created_at or now,
        "updatedAt": now,
        "data": copy.deepcopy(dict(payload)),
    }


def export_filename(config_id: str = DEFAULT_CONFIG_ID) -> str:
    return f"home-config-{config_id}-{datetime.now(UTC).date().isoformat()}.json"


def _has_required_structure(candidate: Any) -> bool:
    if not isinstance(candidate, Mapping):
        return False
    carousel = candidate.get("carousel")
    return (
        isinstance(carousel, Mapping)
        and isinstance(carousel.get("slides"), list)
        and "text" in candidate
        and "cta" in candidate
    )


def parse_import(raw: str | bytes | Mapping[str, Any]) -> ImportResult:
    """Parse and validate an uploaded document, returning the bare payload on success."""
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            document = json.loads(raw)
        except ValueError:
            return ImportResult(success=False, errors=["Import file is not valid JSON"])
    else:
        document = raw

    if not isinstance(document, Mapping):
        return ImportResult(success=False, errors=validate_import_data(document).errors)

    candidate = document.get("data") if is_stored_config_shape(document) else document
    if not _has_required_structure(candidate):
        return ImportResult(success=False, errors=[_STRUCTURE_ERROR])

    validation = validate_import_data(document)
    if not validation.is_valid:
        return ImportResult(success=False, errors=validation.errors)

    payload = {key: copy.deepcopy(candidate[key]) for key in ("carousel", "text", "cta")}
    return ImportResult(success=True, payload=payload)
