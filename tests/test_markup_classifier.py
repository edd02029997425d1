from __future__ import annotations

from tag_engine.markup import Attribute, ParsedInput, classify, parse_input, tokenize


def test_value_bearing_attribute() -> None:
    parsed = parse_input(b"moin\tfrom\tblah blah")

    assert parsed.tag_name == b"moin"
    assert parsed.attributes == [Attribute(name=b"from", value=b"blah blah")]


def test_empty_token_marks_boolean_and_is_consumed() -> None:
    parsed = parse_input(b"log\tproduction\t\tfrom\tnginx")

    assert parsed.attributes == [
        Attribute(name=b"production"),
        Attribute(name=b"from", value=b"nginx"),
    ]


def test_trailing_name_is_boolean() -> None:
    parsed = parse_input(b"div\tclass\t\tid\t\thidden")

    assert [a.name for a in parsed.attributes] == [b"class", b"id", b"hidden"]
    assert all(a.is_boolean for a in parsed.attributes)


def test_leading_empty_tokens_are_skipped() -> None:
    parsed = parse_input(b"div\t\t\tclass\tx")

    assert parsed.attributes == [Attribute(name=b"class", value=b"x")]


def test_names_are_sanitized_but_values_are_raw() -> None:
    parsed = parse_input(b"div\tclass.name\tmy.value")

    assert parsed.attributes == [Attribute(name=b"class~name", value=b"my.value")]


def test_slot_views_are_parallel() -> None:
    parsed = parse_input(b"moin\tfrom\tblah\tx")

    assert parsed.slots == (b"from", b"blah", b"x")
    assert parsed.boolean_flags == (False, False, True)
    assert parsed.slot_count == 3


def test_classification_stops_when_slots_are_full() -> None:
    parsed = classify(tokenize(b"t\ta\t\tb\t\tc\t\td\t\te"), max_slots=4)

    assert [a.name for a in parsed.attributes] == [b"a", b"b", b"c", b"d"]


def test_value_overflowing_slot_table_is_demoted() -> None:
    pairs = b"\t".join(b"a%d\tv%d" % (i, i) for i in range(7))
    data = b"t\t" + pairs + b"\tb\t\tlast\tval"

    parsed = parse_input(data)

    assert len(parsed.attributes) == 9
    last = parsed.attributes[-1]
    assert last.name == b"last"
    assert last.is_boolean
    assert last.demoted
    assert parsed.slot_count == 16


def test_no_tokens_gives_empty_result() -> None:
    assert classify([]) == ParsedInput()


def test_empty_input_has_empty_tag() -> None:
    parsed = parse_input(b"")

    assert parsed.is_empty
    assert parsed.attributes == []
