"""In-memory collections for the content hierarchy.

Category -> Topic -> Lesson -> Sentence each get a cache holding the list last
returned by the server plus ``loading``/``error``/``success`` flags. A cache is
the only writer of its own list. Deleting a parent never touches child caches;
the next fetch reflects what the server did.
"""

from __future__ import annotations

from typing import Any, ClassVar
import logging

from .errors import ApiError
from .gateway import Gateway
from .models import Category, Lesson, Sentence, Topic
from .packaging import MultipartBody


LOGGER = logging.getLogger(__name__)


def _identified(doc) -> bool:
    return isinstance(doc, dict) and bool(doc.get("_id"))


class ResourceCache:
    entity: ClassVar[type]
    path: ClassVar[str]
    list_key: ClassVar[str]
    created_key: ClassVar[str]
    updated_key: ClassVar[str]
    label: ClassVar[str]

    fetch_fallback: ClassVar[str] = "Failed to fetch"
    create_fallback: ClassVar[str] = "Creation failed"
    update_fallback: ClassVar[str] = "Update failed"
    delete_fallback: ClassVar[str] = "Delete failed"

    def __init__(self, gateway: Gateway) -> None:
        self.gateway = gateway
        self.items: list = []
        self.error: str | None = None
        self.success = False
        self._in_flight = 0
        self._generation = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def get(self, entity_id: str):
        for item in self.items:
            if item.id == entity_id:
                return item
        return None

    def reset(self) -> None:
        self.error = None
        self.success = False

    def _call(self, method: str, path: str, body=None, *, params=None, fallback: str) -> dict:
        self._in_flight += 1
        self.error = None
        self.success = False
        try:
            return self.gateway.send(method, path, body, params=params, fallback=fallback)
        except ApiError as exc:
            self.error = exc.message
            raise
        finally:
            self._in_flight -= 1

    def _fetch(self, path: str, *, params: dict[str, Any] | None = None) -> list:
        self._generation += 1
        generation = self._generation
        data = self._call("GET", path, params=params, fallback=self.fetch_fallback)
        items = []
        for doc in data.get(self.list_key) or []:
            if not _identified(doc):
                LOGGER.debug("Skipping %s entry without an id: %r", self.label, doc)
                continue
            items.append(self.entity.from_api(doc))
        if generation != self._generation:
            LOGGER.debug("Discarding superseded %s fetch", self.label)
            return items
        self.items = items
        LOGGER.debug("Loaded %d %s", len(items), self.label)
        return items

    def _place_new(self, entity) -> None:
        # Newest first, whatever position the server would sort it into.
        self.items.insert(0, entity)

    def create(self, body: MultipartBody):
        data = self._call("POST", self.path, body, fallback=self.create_fallback)
        doc = data.get(self.created_key)
        if not _identified(doc):
            self.error = self.create_fallback
            raise ApiError(self.create_fallback)
        entity = self.entity.from_api(doc)
        self._place_new(entity)
        self.success = True
        LOGGER.info("Created %s %s", self.label, entity.id)
        return entity

    def update(self, entity_id: str, body: MultipartBody):
        data = self._call("PUT", f"{self.path}/{entity_id}", body, fallback=self.update_fallback)
        doc = data.get(self.updated_key)
        if not _identified(doc):
            return None
        entity = self.entity.from_api(doc)
        for index, item in enumerate(self.items):
            if item.id == entity.id:
                self.items[index] = entity
                break
        self.success = True
        LOGGER.info("Updated %s %s", self.label, entity.id)
        return entity

    def delete(self, entity_id: str) -> str:
        self._call("DELETE", f"{self.path}/{entity_id}", fallback=self.delete_fallback)
        self.items = [item for item in self.items if item.id != entity_id]
        self.success = True
        LOGGER.info("Deleted %s %s", self.label, entity_id)
        return entity_id


class CategoryCache(ResourceCache):
    entity = Category
    path = "/categories"
    list_key = "categories"
    created_key = "category"
    updated_key = "updatedCategory"
    label = "categories"

    fetch_fallback = "Failed to fetch categories"
    create_fallback = "Failed to create category"
    update_fallback = "Failed to update category"
    delete_fallback = "Route not found"

    def fetch_all(self) -> list[Category]:
        return self._fetch(self.path)


class TopicCache(ResourceCache):
    entity = Topic
    path = "/topics"
    list_key = "topics"
    created_key = "topic"
    updated_key = "topic"
    label = "topics"

    fetch_fallback = "Failed to load topics"
    create_fallback = "Failed to create topic"
    update_fallback = "Failed to update topic"
    delete_fallback = "Failed to delete topic"

    def fetch_all(self, category_id: str) -> list[Topic]:
        return self._fetch(f"{self.path}/{category_id}")


class LessonCache(ResourceCache):
    """Lessons are fetched unscoped (optionally by level) and narrowed per topic locally."""

    entity = Lesson
    path = "/lessons"
    list_key = "lessons"
    created_key = "newLesson"
    updated_key = "updatedLesson"
    label = "lessons"

    fetch_fallback = "Failed to fetch lessons"

    def __init__(self, gateway: Gateway) -> None:
        super().__init__(gateway)
        self.current: Lesson | None = None

    def fetch_all(self, level: str = "all") -> list[Lesson]:
        return self._fetch(self.path, params={"level": level})

    def for_topic(self, topic_id: str) -> list[Lesson]:
        return [lesson for lesson in self.items if lesson.topic_id == topic_id]

    def fetch_one(self, lesson_id: str) -> Lesson:
        fallback = "Failed to load lesson"
        data = self._call("GET", f"{self.path}/{lesson_id}", fallback=fallback)
        doc = data.get("lesson")
        if not _identified(doc):
            self.error = fallback
            raise ApiError(fallback)
        self.current = Lesson.from_api(doc)
        return self.current

    def update(self, entity_id: str, body: MultipartBody) -> Lesson | None:
        lesson = super().update(entity_id, body)
        if lesson is not None and self.current is not None and self.current.id == lesson.id:
            self.current = lesson
        return lesson


class SentenceCache(ResourceCache):
    entity = Sentence
    path = "/sentences"
    list_key = "sentences"
    created_key = "sentence"
    updated_key = "sentence"
    label = "sentences"

    fetch_fallback = "Failed to load sentences"
    create_fallback = "Sentence creation failed"

    def fetch_all(self, lesson_id: str) -> list[Sentence]:
        return self._fetch(f"{self.path}/lesson/{lesson_id}")

    def clear(self) -> None:
        self.items = []

    def next_order(self) -> int:
        return len(self.items) + 1
