"""Capacity constants shared by the markup compiler and the editing session."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

ENV_PREFIX = "TAG_ENGINE_"

TAB = 0x09
NEWLINE = 0x0A
PLACEHOLDER = b"(type something...)"


@dataclass(frozen=True, slots=True)
class Limits:
    """Static bounds every buffer and table in the engine is checked against."""

    input_capacity: int = 4096
    output_capacity: int = 8192
    token_capacity: int = 255
    max_tokens: int = 32
    max_attribute_slots: int = 16
    history_depth: int = 50
    wrap_column: int = 42

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"{item.name} must be a positive integer, got {value!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Limits":
        """Build limits from ``TAG_ENGINE_*`` variables, keeping defaults otherwise."""

        env = os.environ if environ is None else environ
        overrides: dict[str, int] = {}
        for item in fields(cls):
            raw = env.get(f"{ENV_PREFIX}{item.name.upper()}")
            if raw is None or not raw.strip():
                continue
            try:
                overrides[item.name] = int(raw)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}{item.name.upper()} must be an integer, got {raw!r}"
                ) from exc
        return cls(**overrides)

    def evolve(self, **changes: int) -> "Limits":
        return replace(self, **changes)


DEFAULT_LIMITS = Limits()

__all__ = [
    "Limits",
    "DEFAULT_LIMITS",
    "PLACEHOLDER",
    "TAB",
    "NEWLINE",
    "ENV_PREFIX",
]
