"""Checks run before any mutating request is sent.

The duplicate-name check only sees the siblings currently loaded, so it is a
hint for the admin; the server still decides what is unique.
"""

from __future__ import annotations

from typing import Iterable, Protocol
import math

from .errors import ValidationWarning
from .models import CategoryDraft, LessonDraft, SentenceDraft, TopicDraft


class Named(Protocol):
    id: str
    name: str


def _fold(name: str) -> str:
    return name.strip().casefold()


def is_duplicate_name(
    candidate: str, siblings: Iterable[Named], editing_id: str | None = None
) -> bool:
    folded = _fold(candidate)
    return any(
        _fold(sibling.name) == folded and sibling.id != editing_id for sibling in siblings
    )


def name_suggestions(
    fragment: str, siblings: Iterable[Named], editing_id: str | None = None
) -> list:
    """Siblings whose name contains ``fragment``, once more than one character is typed."""
    if len(fragment) <= 1:
        return []
    folded = fragment.casefold()
    return [
        sibling
        for sibling in siblings
        if folded in sibling.name.casefold() and sibling.id != editing_id
    ]


def _require_text(value: str | None, message: str) -> None:
    if not (value or "").strip():
        raise ValidationWarning(message)


def _is_number(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str) and value.strip():
        try:
            return math.isfinite(float(value))
        except ValueError:
            return False
    return False


def check_category_draft(
    draft: CategoryDraft, siblings: Iterable[Named], editing_id: str | None = None
) -> None:
    _require_text(draft.name, "Name is required")
    if not _is_number(draft.order):
        raise ValidationWarning("Display order number is required")
    if is_duplicate_name(draft.name, siblings, editing_id):
        raise ValidationWarning("Name already exists")
    if editing_id is None and draft.thumbnail is None:
        raise ValidationWarning("Thumbnail image is required")


def check_topic_draft(
    draft: TopicDraft, siblings: Iterable[Named], editing_id: str | None = None
) -> None:
    _require_text(draft.name, "Name is required")
    if is_duplicate_name(draft.name, siblings, editing_id):
        raise ValidationWarning("This topic already exists")
    if editing_id is None and draft.thumbnail is None:
        raise ValidationWarning("Thumbnail is required")


def check_lesson_draft(draft: LessonDraft, editing_id: str | None = None) -> None:
    _require_text(draft.title, "Title is required")
    if editing_id is None and draft.thumbnail is None:
        raise ValidationWarning("Please select a thumbnail")


def check_sentence_draft(draft: SentenceDraft, editing_id: str | None = None) -> None:
    _require_text(draft.text, "Text content is required")
    if editing_id is None and draft.image is None:
        raise ValidationWarning("Please select an image")
