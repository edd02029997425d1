"""Splits the raw buffer into delimiter-separated tokens."""

from __future__ import annotations

from tag_engine.limits import DEFAULT_LIMITS, TAB

from .models import Token


def tokenize(
    data: bytes,
    *,
    delimiter: int = TAB,
    max_tokens: int = DEFAULT_LIMITS.max_tokens,
    token_capacity: int = DEFAULT_LIMITS.token_capacity,
) -> list[Token]:
    """Return one token per delimiter-free run, empty runs included.

    ``n`` delimiters always produce ``n + 1`` runs. Runs past ``max_tokens``
    are dropped and each run is cut to ``token_capacity`` bytes.
    """

    runs = bytes(data).split(bytes((delimiter,)))
    return [Token.from_slice(run, capacity=token_capacity) for run in runs[:max_tokens]]


__all__ = ["tokenize"]
