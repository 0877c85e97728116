from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from io import BytesIO
from pathlib import Path
import mimetypes

from PIL import Image, UnidentifiedImageError

from .models import CategoryDraft, LessonDraft, MediaFile, SentenceDraft, TopicDraft


@dataclass
class MultipartBody:
    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, MediaFile] = field(default_factory=dict)

    def add_field(self, name: str, value) -> None:
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif value is None:
            value = ""
        elif isinstance(value, Enum):
            value = value.value
        self.fields[name] = str(value)

    def add_file(self, name: str, media: MediaFile | None) -> None:
        # Leaving the part out keeps the asset already stored on the server.
        if media is not None:
            self.files[name] = media

    def to_requests_files(self) -> list[tuple[str, tuple]]:
        """Return every part in the ``files=`` shape so requests always encodes multipart."""
        parts: list[tuple[str, tuple]] = [
            (name, (None, value)) for name, value in self.fields.items()
        ]
        for name, media in self.files.items():
            parts.append((name, (media.filename, media.content, media.content_type)))
        return parts


def guess_content_type(filename: str, content: bytes) -> str:
    try:
        with Image.open(BytesIO(content)) as img:
            mime = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        mime = None
    if mime:
        return mime
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"


def load_media(path: Path | str) -> MediaFile:
    path = Path(path)
    content = path.read_bytes()
    return MediaFile(
        filename=path.name,
        content=content,
        content_type=guess_content_type(path.name, content),
    )


def package_category(draft: CategoryDraft) -> MultipartBody:
    body = MultipartBody()
    body.add_field("name", draft.name)
    body.add_field("level", draft.level)
    body.add_field("order", draft.order)
    body.add_file("thumbnail", draft.thumbnail)
    return body


def package_topic(draft: TopicDraft, category_id: str) -> MultipartBody:
    body = MultipartBody()
    body.add_field("name", draft.name)
    body.add_field("category", category_id)
    body.add_file("thumbnail", draft.thumbnail)
    return body


def package_lesson(
    draft: LessonDraft, topic_id: str, category_id: str | None = None
) -> MultipartBody:
    body = MultipartBody()
    body.add_field("title", draft.title)
    body.add_field("description", draft.description)
    body.add_field("level", draft.level)
    body.add_field("partNumber", draft.part_number)
    body.add_field("topic", topic_id)
    if category_id:
        body.add_field("category", category_id)
    body.add_file("thumbnail", draft.thumbnail)
    return body


def package_sentence(draft: SentenceDraft, lesson_id: str | None = None) -> MultipartBody:
    """Build a sentence body; ``lesson_id`` is only sent when creating."""
    body = MultipartBody()
    body.add_field("text", draft.text)
    body.add_field("isPremium", draft.is_premium)
    body.add_field("order", draft.order)
    body.add_file("image", draft.image)
    body.add_file("audio", draft.audio)
    if lesson_id:
        body.add_field("lessonId", lesson_id)
    return body
