"""File-backed CRUD for home-screen configuration records.

One JSON file per record, named ``{id}.json`` under the data directory.
Every public method returns a :class:`StoreResult`; I/O and parse failures
are logged here and surfaced as ``INTERNAL_ERROR`` so nothing raw crosses
the store boundary.

The ``default`` record is special: reading or updating it when it does not
exist creates it, and it can never be deleted. Concurrent writers to the
same id are not serialised; the last write wins.
"""

import copy
import json
import logging
import os
import re
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

from homescreen.services.defaults import default_payload, generate_id
from homescreen.services.validation import validate_payload, validate_stored_config

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1
DEFAULT_CONFIG_ID = "default"
METADATA_KEYS = ("id", "schemaVersion", "createdAt", "updatedAt")

_SAFE_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,128}$")

T = TypeVar("T")


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CONFIG = "INVALID_CONFIG"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class StoreError:
    code: ErrorCode
    message: str
    details: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    success: bool
    data: T | None = None
    error: StoreError | None = None

    @classmethod
    def ok(cls, data: T) -> "StoreResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls, code: ErrorCode, message: str, details: list[str] | None = None
    ) -> "StoreResult[T]":
        return cls(success=False, error=StoreError(code, message, list(details or [])))


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. ``2024-06-01T12:00:00.000Z``."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def is_safe_config_id(config_id: str) -> bool:
    return bool(_SAFE_ID_RE.match(config_id))


def is_schema_version(value: Any) -> bool:
    """Stored versions are integers >= 1; floats and bools are rejected."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


class ConfigStore:
    def __init__(
        self,
        data_dir: Path | str,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.data_dir = Path(data_dir)
        self._clock = clock

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def create(
        self, payload: Any, config_id: str | None = None
    ) -> StoreResult[dict[str, Any]]:
        """Validate and persist a new record. ``config_id`` is generated when omitted."""
        validation = validate_payload(payload)
        if not validation.is_valid:
            return StoreResult.fail(
                ErrorCode.VALIDATION_ERROR, "Invalid configuration payload", validation.errors
            )

        if config_id is None:
            config_id = generate_id("config")
        elif not is_safe_config_id(config_id):
            return StoreResult.fail(
                ErrorCode.VALIDATION_ERROR,
                "Invalid configuration id",
                ["Configuration id may only contain letters, digits, '-' and '_'"],
            )

        path = self._path_for(config_id)
        try:
            if path.exists():
                return StoreResult.fail(
                    ErrorCode.ALREADY_EXISTS, f"Configuration '{config_id}' already exists"
                )

            now = self._next_timestamp()
            record = {
                "id": config_id,
                "schemaVersion": CURRENT_SCHEMA_VERSION,
                "createdAt": now,
                "updatedAt": now,
                "data": copy.deepcopy(dict(payload)),
            }
            self._write_record(path, record)
        except OSError:
            logger.exception("Failed to create configuration %s", config_id)
            return StoreResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to create configuration")

        logger.info("Created configuration %s", config_id)
        return StoreResult.ok(record)

    def get(self, config_id: str) -> StoreResult[dict[str, Any]]:
        """Load one record; a missing ``default`` record is seeded on the fly."""
        if not is_safe_config_id(config_id):
            return self._not_found(config_id)

        path = self._path_for(config_id)
        try:
            if not path.exists():
                if config_id == DEFAULT_CONFIG_ID:
                    logger.info("Seeding default configuration")
                    return self.create(default_payload(), DEFAULT_CONFIG_ID)
                return self._not_found(config_id)
            record = self._read_record(path)
        except (OSError, ValueError):
            logger.exception("Failed to read configuration %s", config_id)
            return StoreResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to read configuration")

        errors = validate_stored_config(record).errors
        if not errors and not is_schema_version(record.get("schemaVersion")):
            errors = ["Configuration schemaVersion must be a positive integer"]
        if errors:
            logger.warning("Stored configuration %s failed validation: %s", config_id, errors)
            return StoreResult.fail(
                ErrorCode.INVALID_CONFIG,
                f"Stored configuration '{config_id}' is invalid",
                errors,
            )

        return StoreResult.ok(record)

    def update(self, config_id: str, payload: Any) -> StoreResult[dict[str, Any]]:
        """Replace a record's payload, keeping ``createdAt`` and ``schemaVersion``."""
        validation = validate_payload(payload)
        if not validation.is_valid:
            return StoreResult.fail(
                ErrorCode.VALIDATION_ERROR, "Invalid configuration payload", validation.errors
            )

        if not is_safe_config_id(config_id):
            return self._not_found(config_id)

        path = self._path_for(config_id)
        try:
            if not path.exists():
                if config_id == DEFAULT_CONFIG_ID:
                    return self.create(payload, DEFAULT_CONFIG_ID)
                return self._not_found(config_id)

            existing = self._read_record(path)
            now = self._next_timestamp()
            record = {
                "id": config_id,
                "schemaVersion": self._schema_version_of(existing),
                "createdAt": existing.get("createdAt") or now,
                "updatedAt": now,
                "data": copy.deepcopy(dict(payload)),
            }
            self._write_record(path, record)
        except (OSError, ValueError):
            logger.exception("Failed to update configuration %s", config_id)
            return StoreResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to update configuration")

        logger.info("Updated configuration %s", config_id)
        return StoreResult.ok(record)

    def delete(self, config_id: str) -> StoreResult[None]:
        if config_id == DEFAULT_CONFIG_ID:
            return StoreResult.fail(
                ErrorCode.FORBIDDEN, "The default configuration cannot be deleted"
            )
        if not is_safe_config_id(config_id):
            return self._not_found(config_id)

        try:
            self._path_for(config_id).unlink()
        except FileNotFoundError:
            return self._not_found(config_id)
        except OSError:
            logger.exception("Failed to delete configuration %s", config_id)
            return StoreResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to delete configuration")

        logger.info("Deleted configuration %s", config_id)
        return StoreResult(success=True)

    def list_configs(self) -> StoreResult[list[dict[str, Any]]]:
        """Metadata for every readable record, most recently updated first.

        A file that cannot be parsed is skipped so one corrupt record does not
        break the index.
        """
        items: list[dict[str, Any]] = []
        try:
            if not self.data_dir.is_dir():
                return StoreResult.ok(items)
            paths = sorted(self.data_dir.glob("*.json"))
        except OSError:
            logger.exception("Failed to list configurations in %s", self.data_dir)
            return StoreResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to list configurations")

        for path in paths:
            try:
                items.append(self._metadata_of(self._read_record(path)))
            except (OSError, ValueError) as exc:
                logger.warning("Skipping unreadable configuration file %s: %s", path.name, exc)

        items.sort(key=lambda item: item["updatedAt"], reverse=True)
        return StoreResult.ok(items)

    # ------------------------------------------------------------------
    # File helpers
    # ------------------------------------------------------------------

    def _path_for(self, config_id: str) -> Path:
        return self.data_dir / f"{config_id}.json"

    def _read_record(self, path: Path) -> dict[str, Any]:
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError("Configuration file must contain a JSON object")
        return raw

    def _write_record(self, path: Path, record: Mapping[str, Any]) -> None:
        """Write via a sibling temp file and ``os.replace`` so readers never see a partial file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(f".{path.stem}.{uuid.uuid4().hex}.tmp")
        try:
            with tmp.open("w", encoding="utf-8") as fh:
                json.dump(record, fh, ensure_ascii=False, indent=2)
                fh.write("\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp, path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

    @staticmethod
    def _metadata_of(record: Mapping[str, Any]) -> dict[str, Any]:
        for key in ("id", "createdAt", "updatedAt"):
            if not isinstance(record.get(key), str):
                raise ValueError(f"missing or non-string {key}")
        if not is_schema_version(record.get("schemaVersion")):
            raise ValueError("missing or non-integer schemaVersion")
        return {key: record[key] for key in METADATA_KEYS}

    @staticmethod
    def _schema_version_of(record: Mapping[str, Any]) -> int:
        version = record.get("schemaVersion")
        if is_schema_version(version):
            return version
        return CURRENT_SCHEMA_VERSION

    def _latest_updated_at(self) -> datetime | None:
        latest = None
        if not self.data_dir.is_dir():
            return latest
        for path in self.data_dir.glob("*.json"):
            try:
                stamp = datetime.fromisoformat(self._read_record(path)["updatedAt"])
            except (OSError, ValueError, KeyError, TypeError):
                continue
            if stamp.tzinfo is None:
                stamp = stamp.replace(tzinfo=UTC)
            if latest is None or stamp > latest:
                latest = stamp
        return latest

    def _next_timestamp(self) -> str:
        """Current time, moved past every ``updatedAt`` already in the store.

        Timestamps have millisecond precision, so writes landing in the same
        millisecond are nudged forward by 1 ms to keep write order visible in
        ``updatedAt`` across the whole store.
        """
        now = self._clock()
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)
        latest = self._latest_updated_at()
        if latest is not None and now <= latest:
            now = latest + timedelta(milliseconds=1)
        return format_timestamp(now)

    @staticmethod
    def _not_found(config_id: str) -> StoreResult[Any]:
        return StoreResult.fail(ErrorCode.NOT_FOUND, f"Configuration '{config_id}' not found")
