from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
import logging

import requests

from .analytics import AnalyticsStore
from .config import Settings
from .confirm import Confirmer, TypedConfirmation, always_confirm
from .errors import ApiError, ValidationWarning
from .gateway import Gateway
from .guards import check_category_draft, check_lesson_draft, check_sentence_draft, check_topic_draft
from .models import CategoryDraft, LessonDraft, SentenceDraft, Topic, TopicDraft
from .packaging import package_category, package_lesson, package_sentence, package_topic
from .resources import CategoryCache, LessonCache, ResourceCache, SentenceCache, TopicCache
from .session import SessionStore
from .storage import CredentialVault


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    kind: str  # success | info | warning | error
    message: str

    @property
    def ok(self) -> bool:
        return self.kind in ("success", "info")


class AdminConsole:
    """Wires the stores together and runs the save/delete flows behind each admin action.

    Every action returns a :class:`Notice` and leaves the cache flags reset, so
    nothing stale is left over for the next action.
    """

    def __init__(
        self,
        session: SessionStore,
        gateway: Gateway,
        *,
        confirm: Confirmer = always_confirm,
    ) -> None:
        self.session = session
        self.gateway = gateway
        self.confirm = confirm
        self.categories = CategoryCache(gateway)
        self.topics = TopicCache(gateway)
        self.lessons = LessonCache(gateway)
        self.sentences = SentenceCache(gateway)
        self.analytics = AnalyticsStore(gateway)
        self.topic_delete_gate: TypedConfirmation[Topic] = TypedConfirmation()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        http: requests.Session | None = None,
        navigate: Callable[[str], None] | None = None,
        confirm: Confirmer = always_confirm,
    ) -> AdminConsole:
        vault = CredentialVault(settings.session.credential_file, settings.session.token_key)
        session = SessionStore(vault)
        gateway = Gateway(
            settings.api.base_url,
            session,
            http=http,
            timeout=settings.api.timeout,
            navigate=navigate,
        )
        return cls(session, gateway, confirm=confirm)

    def login(self, email: str, password: str) -> Notice:
        try:
            admin = self.session.login(self.gateway, email, password)
        except ApiError as exc:
            return Notice("error", exc.message)
        name = admin.name if admin else email
        return Notice("success", f"Welcome back, {name}")

    def logout(self) -> Notice:
        self.session.logout()
        self.analytics.reset()
        return Notice("info", "Signed out")

    def _run(self, cache: ResourceCache, action: Callable[[], object], message: str) -> Notice:
        try:
            action()
        except ValidationWarning as exc:
            LOGGER.info("Not sent: %s", exc)
            return Notice("warning", str(exc))
        except ApiError as exc:
            return Notice("error", exc.message)
        finally:
            cache.reset()
        return Notice("success", message)

    def save_category(self, draft: CategoryDraft, editing_id: str | None = None) -> Notice:
        def action() -> None:
            check_category_draft(draft, self.categories.items, editing_id)
            body = package_category(draft)
            if editing_id:
                self.categories.update(editing_id, body)
            else:
                self.categories.create(body)

        message = "Category updated successfully!" if editing_id else "Category created successfully!"
        return self._run(self.categories, action, message)

    def save_topic(
        self, draft: TopicDraft, category_id: str, editing_id: str | None = None
    ) -> Notice:
        def action() -> None:
            check_topic_draft(draft, self.topics.items, editing_id)
            body = package_topic(draft, category_id)
            if editing_id:
                self.topics.update(editing_id, body)
            else:
                self.topics.create(body)

        return self._run(self.topics, action, "Topic updated!" if editing_id else "Topic created!")

    def save_lesson(
        self, draft: LessonDraft, topic_id: str, editing_id: str | None = None
    ) -> Notice:
        topic = self.topics.get(topic_id)
        category_id = topic.category_id if topic else None

        def action() -> None:
            check_lesson_draft(draft, editing_id)
            body = package_lesson(draft, topic_id, category_id)
            if editing_id:
                self.lessons.update(editing_id, body)
            else:
                self.lessons.create(body)

        return self._run(self.lessons, action, "Lesson Updated!" if editing_id else "Lesson Created!")

    def save_sentence(
        self, draft: SentenceDraft, lesson_id: str, editing_id: str | None = None
    ) -> Notice:
        def action() -> None:
            check_sentence_draft(draft, editing_id)
            if editing_id:
                self.sentences.update(editing_id, package_sentence(draft))
            else:
                self.sentences.create(package_sentence(draft, lesson_id))

        message = "Slide updated successfully!" if editing_id else "Slide created successfully!"
        notice = self._run(self.sentences, action, message)
        if notice.ok:
            self.refresh_sentences(lesson_id)
        return notice

    def refresh_sentences(self, lesson_id: str) -> Notice | None:
        try:
            self.sentences.fetch_all(lesson_id)
        except ApiError as exc:
            return Notice("error", exc.message)
        finally:
            self.sentences.reset()
        return None

    def _remove(self, cache: ResourceCache, entity_id: str, prompt: str, message: str) -> Notice | None:
        if not self.confirm(prompt):
            return None
        notice = self._run(cache, lambda: cache.delete(entity_id), message)
        if notice.kind == "success":
            return Notice("info", message)
        return notice

    def remove_category(self, category_id: str) -> Notice | None:
        return self._remove(
            self.categories, category_id, "Delete this category?", "Category removed successfully"
        )

    def remove_lesson(self, lesson_id: str) -> Notice | None:
        return self._remove(
            self.lessons, lesson_id, "Are you sure you want to delete this lesson?", "Lesson deleted"
        )

    def remove_sentence(self, sentence_id: str) -> Notice | None:
        return self._remove(
            self.sentences,
            sentence_id,
            "Are you sure you want to delete this slide?",
            "Slide deleted",
        )

    def begin_topic_delete(self, topic: Topic) -> None:
        self.topic_delete_gate.open(topic)

    def confirm_topic_delete(self) -> Notice | None:
        """Delete the topic held by the gate, only once DELETE has been typed."""
        topic = self.topic_delete_gate.confirm()
        if topic is None:
            return None
        notice = self._run(self.topics, lambda: self.topics.delete(topic.id), "Topic permanently deleted")
        if notice.kind == "success":
            return Notice("info", notice.message)
        return notice
