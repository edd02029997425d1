"""Decides which tokens are attribute names, values, or boolean flags."""

from __future__ import annotations

from typing import Sequence

from tag_engine.limits import DEFAULT_LIMITS
from tag_engine.runtime import telemetry

from .models import Attribute, ParsedInput, Token
from .sanitize import sanitize_name


def classify(
    tokens: Sequence[Token],
    *,
    max_slots: int = DEFAULT_LIMITS.max_attribute_slots,
    name_capacity: int = DEFAULT_LIMITS.token_capacity,
) -> ParsedInput:
    """Build a :class:`ParsedInput` from ``tokens``; index 0 is the tag name.

    After each attribute name, an empty token marks it boolean and is
    consumed; a non-empty token is its value. A name with nothing after it is
    boolean as well. A value that would not fit in the slot table is dropped
    and its name kept as a boolean attribute.
    """

    if not tokens:
        return ParsedInput()

    parsed = ParsedInput(tag_name=sanitize_name(tokens[0].data, capacity=name_capacity))
    used = 0
    index = 1
    count = len(tokens)

    while index < count and used < max_slots:
        while index < count and tokens[index].is_empty:
            index += 1
        if index >= count:
            break

        name = sanitize_name(tokens[index].data, capacity=name_capacity)
        index += 1

        if index >= count or tokens[index].is_empty:
            attribute = Attribute(name=name)
            index += 1
        elif used + 1 < max_slots:
            attribute = Attribute(name=name, value=tokens[index].data)
            index += 1
        else:
            # Value slot would overflow the table: keep the name, drop the value.
            attribute = Attribute(name=name, demoted=True)
            index += 1
            telemetry.record_event(
                "markup.attribute_demoted",
                level="debug",
                data={"name": name, "slots": used},
            )

        parsed.attributes.append(attribute)
        used += attribute.slots

    return parsed


__all__ = ["classify"]
