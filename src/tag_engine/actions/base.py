"""Key events and action results shared by actions and the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from tag_engine.submit import Submission


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed over by a host."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class ActionResult:
    """Result returned from an action or ``KeyDispatcher.handle_key``."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    submission: Optional[Submission] = None
    quit: bool = False


__all__ = ["KeyInput", "ActionResult"]
