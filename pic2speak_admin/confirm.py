from __future__ import annotations

from typing import Callable, Generic, TypeVar


T = TypeVar("T")

DELETE_PHRASE = "DELETE"

# (prompt) -> bool; the single "are you sure" step for categories, lessons and sentences.
Confirmer = Callable[[str], bool]


class TypedConfirmation(Generic[T]):
    """Topic deletion gate: the admin has to type DELETE exactly."""

    def __init__(self, phrase: str = DELETE_PHRASE) -> None:
        self.phrase = phrase
        self.target: T | None = None
        self.text = ""

    @property
    def is_open(self) -> bool:
        return self.target is not None

    @property
    def armed(self) -> bool:
        return self.is_open and self.text == self.phrase

    def open(self, target: T) -> None:
        self.target = target
        self.text = ""

    def type(self, text: str) -> None:
        self.text = text

    def confirm(self) -> T | None:
        if not self.armed:
            return None
        target = self.target
        self.cancel()
        return target

    def cancel(self) -> None:
        self.target = None
        self.text = ""


def always_confirm(prompt: str) -> bool:
    return True
