"""Tokenize → classify → render, the full parse pass."""

from __future__ import annotations

from tag_engine.limits import DEFAULT_LIMITS, TAB, Limits
from tag_engine.runtime.telemetry import span

from .classifier import classify
from .models import OutputText, ParsedInput, RenderMode
from .serializer import render
from .tokenizer import tokenize


def parse_input(data: bytes, *, limits: Limits = DEFAULT_LIMITS) -> ParsedInput:
    tokens = tokenize(
        data,
        delimiter=TAB,
        max_tokens=limits.max_tokens,
        token_capacity=limits.token_capacity,
    )
    return classify(
        tokens,
        max_slots=limits.max_attribute_slots,
        name_capacity=limits.token_capacity,
    )


def compile_markup(
    data: bytes,
    mode: RenderMode = RenderMode.REGULAR,
    *,
    limits: Limits = DEFAULT_LIMITS,
) -> OutputText:
    """Compile one tab-delimited line into its compact and display markup."""

    with span(
        "markup::compile",
        component="markup",
        metadata={"bytes": len(data), "mode": mode.value},
    ) as handle:
        parsed = parse_input(data, limits=limits)
        handle.add_metadata("attributes", len(parsed.attributes))
        return render(parsed, mode, limits=limits)


__all__ = ["parse_input", "compile_markup"]
