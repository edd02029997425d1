"""Hand-off of the finished markup to typing and clipboard collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tag_engine.markup import decode


class SubmitAction(str, Enum):
    TYPE = "type"  # typed into the previously focused window
    CLIPBOARD = "clipboard"


@dataclass(frozen=True, slots=True)
class TypingPlan:
    """How a keystroke injector should replay the markup.

    Lines are typed one by one with a shift+enter between them so the target
    application does not submit early. When the opening and closing tags are
    separated by a blank line, ``cursor_up`` asks the injector to step back up
    into it once typing is done.
    """

    lines: tuple[str, ...]
    cursor_up: bool = False

    @classmethod
    def from_text(cls, text: str) -> "TypingPlan":
        if not text:
            return cls(lines=())
        opening_end = text.find(">")
        closing_start = text.find("</")
        cursor_up = (
            opening_end >= 0
            and closing_start > opening_end
            and "\n" in text[opening_end + 1 : closing_start]
        )
        return cls(lines=tuple(text.split("\n")), cursor_up=cursor_up)

    @property
    def line_breaks(self) -> int:
        return max(len(self.lines) - 1, 0)


@dataclass(frozen=True, slots=True)
class Submission:
    action: SubmitAction
    data: bytes

    @property
    def text(self) -> str:
        return decode(self.data)

    @property
    def is_empty(self) -> bool:
        return not self.data

    def typing_plan(self) -> TypingPlan:
        return TypingPlan.from_text(self.text)


__all__ = ["SubmitAction", "Submission", "TypingPlan"]
