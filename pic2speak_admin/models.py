from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Level(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @classmethod
    def parse(cls, value: Any) -> Level | None:
        if isinstance(value, Level):
            return value
        for level in cls:
            if level.value == value:
                return level
        return None


def owner_id(value: Any) -> str | None:
    """Return the id of a foreign reference that may arrive populated or bare."""
    if isinstance(value, dict):
        value = value.get("_id")
    return str(value) if value else None


def _int_or_none(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class Category:
    id: str
    name: str
    thumbnail: str | None = None
    level: Level | None = None
    order: int | None = None

    @classmethod
    def from_api(cls, doc: dict) -> Category:
        return cls(
            id=str(doc["_id"]),
            name=str(doc.get("name") or ""),
            thumbnail=doc.get("thumbnail"),
            level=Level.parse(doc.get("level")),
            order=_int_or_none(doc.get("order")),
        )


@dataclass
class Topic:
    id: str
    name: str
    thumbnail: str | None = None
    category_id: str | None = None

    @classmethod
    def from_api(cls, doc: dict) -> Topic:
        return cls(
            id=str(doc["_id"]),
            name=str(doc.get("name") or ""),
            thumbnail=doc.get("thumbnail"),
            category_id=owner_id(doc.get("category")),
        )


@dataclass
class Lesson:
    id: str
    title: str
    description: str = ""
    level: Level | None = None
    part_number: int | None = None
    thumbnail: str | None = None
    topic_id: str | None = None
    category_id: str | None = None

    @classmethod
    def from_api(cls, doc: dict) -> Lesson:
        return cls(
            id=str(doc["_id"]),
            title=str(doc.get("title") or ""),
            description=str(doc.get("description") or ""),
            level=Level.parse(doc.get("level")),
            part_number=_int_or_none(doc.get("partNumber")),
            thumbnail=doc.get("thumbnail"),
            topic_id=owner_id(doc.get("topic")),
            category_id=owner_id(doc.get("category")),
        )


@dataclass
class Sentence:
    id: str
    text: str
    is_premium: bool = False
    order: int | None = None
    image: str | None = None
    audio: str | None = None
    lesson_id: str | None = None

    @classmethod
    def from_api(cls, doc: dict) -> Sentence:
        premium = doc.get("isPremium", False)
        if isinstance(premium, str):
            premium = premium.lower() == "true"
        return cls(
            id=str(doc["_id"]),
            text=str(doc.get("text") or ""),
            is_premium=bool(premium),
            order=_int_or_none(doc.get("order")),
            image=doc.get("image"),
            audio=doc.get("audio"),
            lesson_id=owner_id(doc.get("lessonId") or doc.get("lesson")),
        )


@dataclass
class Admin:
    name: str
    email: str = ""

    @classmethod
    def from_api(cls, doc: dict | None) -> Admin | None:
        if not doc:
            return None
        return cls(name=str(doc.get("name") or doc.get("email") or ""), email=str(doc.get("email") or ""))


@dataclass(frozen=True)
class StatsSnapshot:
    total_users: int = 0
    total_lessons: int = 0
    total_sentences: int = 0
    total_feedbacks: int = 0
    total_categories: int = 0
    total_topics: int = 0
    average_rating: float = 0.0
    user_growth: tuple[dict[str, Any], ...] = ()

    @classmethod
    def from_api(cls, doc: dict | None) -> StatsSnapshot:
        doc = doc or {}
        return cls(
            total_users=int(doc.get("totalUsers") or 0),
            total_lessons=int(doc.get("totalLessons") or 0),
            total_sentences=int(doc.get("totalSentences") or 0),
            total_feedbacks=int(doc.get("totalFeedbacks") or 0),
            total_categories=int(doc.get("totalCategories") or 0),
            total_topics=int(doc.get("totalTopics") or 0),
            average_rating=float(doc.get("averageRating") or 0),
            user_growth=tuple(doc.get("userGrowth") or ()),
        )


@dataclass(frozen=True)
class HealthSnapshot:
    status: str = "Checking..."
    details: dict[str, Any] = field(
        default_factory=lambda: {"database": "Checking...", "cache": "Checking...", "uptime": 0}
    )

    @classmethod
    def unhealthy(cls) -> HealthSnapshot:
        return cls(
            status="Unhealthy",
            details={"database": "Disconnected", "cache": "Offline", "uptime": 0},
        )


@dataclass(frozen=True)
class MediaFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class CategoryDraft:
    name: str = ""
    level: Level = Level.BEGINNER
    order: int | str | None = None
    thumbnail: MediaFile | None = None


@dataclass
class TopicDraft:
    name: str = ""
    thumbnail: MediaFile | None = None


@dataclass
class LessonDraft:
    title: str = ""
    description: str = ""
    level: Level = Level.BEGINNER
    part_number: int = 1
    thumbnail: MediaFile | None = None


@dataclass
class SentenceDraft:
    text: str = ""
    is_premium: bool = False
    order: int = 0
    image: MediaFile | None = None
    audio: MediaFile | None = None
