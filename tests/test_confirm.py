from __future__ import annotations

import pytest

from pic2speak_admin.confirm import TypedConfirmation
from pic2speak_admin.models import Topic


@pytest.fixture()
def gate() -> TypedConfirmation[Topic]:
    gate: TypedConfirmation[Topic] = TypedConfirmation()
    gate.open(Topic(id="t1", name="Kitchen"))
    return gate


@pytest.mark.parametrize("typed", ["", "delete", "DELET", "DELETE ", " DELETE", "Kitchen"])
def test_anything_but_the_exact_phrase_stays_disarmed(gate, typed):
    gate.type(typed)

    assert gate.armed is False
    assert gate.confirm() is None
    assert gate.is_open


def test_exact_phrase_releases_target(gate):
    gate.type("DELETE")

    assert gate.armed
    assert gate.confirm() == Topic(id="t1", name="Kitchen")
    assert gate.is_open is False


def test_cancel_discards_typed_text(gate):
    gate.type("DELETE")
    gate.cancel()

    assert gate.text == ""
    assert gate.confirm() is None


def test_reopening_starts_with_empty_text(gate):
    gate.type("DELE")
    gate.open(Topic(id="t2", name="Bedroom"))

    assert gate.text == ""
    assert gate.target.id == "t2"
