from __future__ import annotations

import pytest

from pic2speak_admin.errors import ValidationWarning
from pic2speak_admin.guards import (
    check_category_draft,
    check_lesson_draft,
    check_sentence_draft,
    check_topic_draft,
    is_duplicate_name,
    name_suggestions,
)
from pic2speak_admin.models import (
    Category,
    CategoryDraft,
    LessonDraft,
    MediaFile,
    SentenceDraft,
    Topic,
    TopicDraft,
)


THUMB = MediaFile("t.png", b"\x89PNG", "image/png")


@pytest.fixture()
def topics() -> list[Topic]:
    return [Topic(id="t1", name="Kitchen"), Topic(id="t2", name="Living Room")]


def test_duplicate_is_case_insensitive_in_create_mode(topics):
    assert is_duplicate_name("kitchen", topics) is True


def test_editing_entity_does_not_collide_with_itself(topics):
    assert is_duplicate_name("kitchen", topics, editing_id="t1") is False


def test_editing_into_a_sibling_name_is_a_duplicate(topics):
    assert is_duplicate_name("KITCHEN ", topics, editing_id="t2") is True


def test_suggestions_need_more_than_one_character(topics):
    assert name_suggestions("k", topics) == []
    assert [t.id for t in name_suggestions("oo", topics)] == ["t2"]
    assert name_suggestions("room", topics, editing_id="t2") == []


@pytest.mark.parametrize(
    ("draft", "message"),
    [
        (CategoryDraft(name="  ", order=1, thumbnail=THUMB), "Name is required"),
        (CategoryDraft(name="Home", order=None, thumbnail=THUMB), "Display order number is required"),
        (CategoryDraft(name="Home", order="first", thumbnail=THUMB), "Display order number is required"),
        (CategoryDraft(name="home", order=2, thumbnail=THUMB), "Name already exists"),
        (CategoryDraft(name="Garden", order=2), "Thumbnail image is required"),
    ],
)
def test_category_create_checks(draft, message):
    siblings = [Category(id="c1", name="Home")]

    with pytest.raises(ValidationWarning, match=message):
        check_category_draft(draft, siblings)


def test_category_order_zero_is_a_number():
    check_category_draft(CategoryDraft(name="Intro", order=0, thumbnail=THUMB), [])
    check_category_draft(CategoryDraft(name="Intro", order="3"), [], editing_id="c1")


def test_topic_edit_does_not_need_thumbnail(topics):
    check_topic_draft(TopicDraft(name="Kitchen"), topics, editing_id="t1")


def test_topic_create_needs_thumbnail(topics):
    with pytest.raises(ValidationWarning, match="Thumbnail is required"):
        check_topic_draft(TopicDraft(name="Bedroom"), topics)


def test_topic_duplicate_reported_before_thumbnail(topics):
    with pytest.raises(ValidationWarning, match="already exists"):
        check_topic_draft(TopicDraft(name="Kitchen"), topics)


def test_lesson_checks():
    with pytest.raises(ValidationWarning, match="Title is required"):
        check_lesson_draft(LessonDraft(title=""), editing_id="l1")
    with pytest.raises(ValidationWarning, match="thumbnail"):
        check_lesson_draft(LessonDraft(title="Greetings"))
    check_lesson_draft(LessonDraft(title="Greetings"), editing_id="l1")


def test_sentence_checks():
    with pytest.raises(ValidationWarning, match="Text content is required"):
        check_sentence_draft(SentenceDraft(text="   ", image=THUMB))
    with pytest.raises(ValidationWarning, match="image"):
        check_sentence_draft(SentenceDraft(text="Hello"))
    check_sentence_draft(SentenceDraft(text="Hello"), editing_id="s1")


@pytest.mark.parametrize("order", ["nan", "inf", "-inf", float("nan"), float("inf")])
def test_category_order_must_be_finite(order):
    with pytest.raises(ValidationWarning, match="Display order number is required"):
        check_category_draft(CategoryDraft(name="Intro", order=order, thumbnail=THUMB), [])
