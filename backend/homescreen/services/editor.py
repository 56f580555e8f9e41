"""Editing state for one admin session.

The caller owns an :class:`EditorSession` instance; there is no shared,
process-wide editor state. Section updates are shallow merges, the same
partial edits the form widgets make before the whole payload is submitted.
"""

import copy
from collections.abc import Mapping
from typing import Any, Literal

from pydantic.alias_generators import to_camel

from homescreen.services.defaults import default_payload, generate_slide_id
from homescreen.services.interchange import ImportResult, parse_import
from homescreen.services.validation import ValidationResult, validate_payload

MAX_SLIDES = 5


class EditorError(Exception):
    """Raised for edits the editing surface does not allow."""


def _wire_keys(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Accept ``heading_color`` or ``headingColor`` style keys."""
    return {to_camel(key): value for key, value in changes.items()}


def _slide_id(slide: Any) -> Any:
    return slide.get("id") if isinstance(slide, Mapping) else None


class EditorSession:
    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        start = copy.deepcopy(dict(initial)) if initial is not None else default_payload()
        self._config: dict[str, Any] = start
        self._saved: dict[str, Any] = copy.deepcopy(start)
        self.has_unsaved_changes = False

    @property
    def config(self) -> dict[str, Any]:
        """A copy of the current payload."""
        return copy.deepcopy(self._config)

    @property
    def slides(self) -> list[dict[str, Any]]:
        carousel = self._config.get("carousel")
        if not isinstance(carousel, Mapping):
            return []
        slides = carousel.get("slides")
        return list(slides) if isinstance(slides, list) else []

    def _merge(self, section: str, changes: Mapping[str, Any]) -> None:
        existing = self._config.get(section)
        current = dict(existing) if isinstance(existing, Mapping) else {}
        current.update(_wire_keys(changes))
        self._config[section] = current
        self.has_unsaved_changes = True

    def update_carousel(self, **changes: Any) -> None:
        self._merge("carousel", changes)

    def update_text(self, **changes: Any) -> None:
        self._merge("text", changes)

    def update_cta(self, **changes: Any) -> None:
        self._merge("cta", changes)

    def add_slide(self) -> dict[str, Any]:
        """Append a blank slide; the caller fills in image and alt text."""
        if len(self.slides) >= MAX_SLIDES:
            raise EditorError(f"A carousel can hold at most {MAX_SLIDES} slides")
        slide = {
            "id": generate_slide_id(),
            "imageUrl": "",
            "altText": "",
            "linkUrl": "",
            "aspectRatio": "landscape",
        }
        self.update_carousel(slides=[*self.slides, slide])
        return copy.deepcopy(slide)

    def remove_slide(self, slide_id: str) -> None:
        self.update_carousel(slides=[s for s in self.slides if _slide_id(s) != slide_id])

    def update_slide(self, slide_id: str, **changes: Any) -> None:
        updates = _wire_keys(changes)
        self.update_carousel(
            slides=[{**s, **updates} if _slide_id(s) == slide_id else s for s in self.slides]
        )

    def move_slide(self, index: int, direction: Literal["up", "down"]) -> None:
        target = index - 1 if direction == "up" else index + 1
        slides = list(self.slides)
        if not (0 <= index < len(slides)) or not (0 <= target < len(slides)):
            return
        slides[index], slides[target] = slides[target], slides[index]
        self.update_carousel(slides=slides)

    def set_config(self, payload: Mapping[str, Any], mark_unsaved: bool = False) -> None:
        self._config = copy.deepcopy(dict(payload))
        self.has_unsaved_changes = mark_unsaved

    def mark_saved(self) -> None:
        """Make the current payload the baseline that :meth:`reset` returns to."""
        self._saved = copy.deepcopy(self._config)
        self.has_unsaved_changes = False

    def reset(self) -> None:
        self._config = copy.deepcopy(self._saved)
        self.has_unsaved_changes = False

    def validate(self) -> ValidationResult:
        return validate_payload(self._config)

    def import_document(self, raw: str | bytes | Mapping[str, Any]) -> ImportResult:
        """Replace the editor state with an imported document, leaving it unsaved."""
        result = parse_import(raw)
        if result.success and result.payload is not None:
            self.set_config(result.payload, mark_unsaved=True)
        return result
