from __future__ import annotations

import pytest

from tag_engine.limits import DEFAULT_LIMITS, PLACEHOLDER
from tag_engine.markup import (
    OutputWriter,
    RenderMode,
    WrappingWriter,
    compile_markup,
    escape_value,
    write_escaped,
)


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"moin", b"<moin>\n\n</moin>"),
        (b"moin\tfrom\tblah blah", b'<moin from="blah blah">\n\n</moin>'),
        (
            b"log\tproduction\t\tfrom\tnginx",
            b'<log production from="nginx">\n\n</log>',
        ),
        (b"div\tclass\t\tid\t\thidden", b"<div class id hidden>\n\n</div>"),
        (
            b'div\tclass\thello "world" & <test>',
            b'<div class="hello &quot;world&quot; &amp; &lt;test&gt;">\n\n</div>',
        ),
        (b"div\t \tval\tx", b"<div x>\n\n</div>"),
        (b"my.tag", b"<my~tag>\n\n</my~tag>"),
        (
            b"data,point.with@symbols",
            b"<data~point~with~symbols>\n\n</data~point~with~symbols>",
        ),
        (b"div\tclass.name\tmy.value", b'<div class~name="my.value">\n\n</div>'),
        (
            b"tag\tdata\tR&D department",
            b'<tag data="R&amp;D department">\n\n</tag>',
        ),
    ],
)
def test_compact_output(data: bytes, expected: bytes) -> None:
    assert compile_markup(data).compact == expected


def test_value_entities_are_escaped() -> None:
    result = compile_markup(b'a\tq\t"<&>"')

    assert result.compact == b'<a q="&quot;&lt;&amp;&gt;&quot;">\n\n</a>'


def test_self_closing_form() -> None:
    result = compile_markup(b"div\tclass\tcontainer", RenderMode.SELF_CLOSING)

    assert result.compact == b'<div class="container" />\n'
    assert result.display == b'<div class="container" />\n'


def test_self_closing_with_booleans() -> None:
    result = compile_markup(
        b"input\ttype\ttext\thidden\t\trequired", RenderMode.SELF_CLOSING
    )

    assert result.compact == b'<input type="text" hidden required />\n'


def test_display_uses_wider_gap() -> None:
    assert compile_markup(b"moin").display == b"<moin>\n\n\n</moin>"


@pytest.mark.parametrize("data", [b"", b"   ", b"\t\tclass\tx"])
def test_missing_tag_name_renders_placeholder(data: bytes) -> None:
    result = compile_markup(data)

    assert result.compact == PLACEHOLDER
    assert result.display == PLACEHOLDER


def test_display_wraps_long_tag_names() -> None:
    name = b"a" * 50

    result = compile_markup(name)

    assert result.compact == b"<" + name + b">\n\n</" + name + b">"
    assert result.display == (
        b"<" + b"a" * 41 + b"\n" + b"a" * 9 + b">\n\n\n</" + b"a" * 40 + b"\n"
        + b"a" * 10 + b">"
    )


def test_display_lines_never_exceed_wrap_column() -> None:
    data = (b"word\tvalue with spaces & <stuff>\t" * 200)[: DEFAULT_LIMITS.input_capacity]

    display = compile_markup(data).display

    assert b"\n" in display
    assert all(len(line) <= 42 for line in display.split(b"\n"))


def test_wrap_column_follows_limits() -> None:
    limits = DEFAULT_LIMITS.evolve(wrap_column=10)

    display = compile_markup(b"div\tclass\tcontainer", limits=limits).display

    assert all(len(line) <= 10 for line in display.split(b"\n"))


def test_output_capacity_truncates_and_keeps_entities_whole() -> None:
    limits = DEFAULT_LIMITS.evolve(output_capacity=20)

    result = compile_markup(b"moin\tfrom\tblah blah", limits=limits)

    assert result.compact == b'<moin from="bl">\n\n</'
    assert len(result.compact) == 20


def test_wrapping_writer_breaks_mid_fragment() -> None:
    writer = WrappingWriter(100, column=5)

    writer.write(b"abcdefghij")
    writer.write(b"\n")
    writer.write(b"k")

    assert writer.getvalue() == b"abcde\nfghij\nk"


def test_output_writer_drops_overflow() -> None:
    writer = OutputWriter(5)

    writer.write(b"abcdefg")
    writer.write(b"more")

    assert writer.getvalue() == b"abcde"
    assert writer.remaining == 0


def test_escape_value() -> None:
    assert escape_value(b'a"b&c<d>e') == b"a&quot;b&amp;c&lt;d&gt;e"


def test_write_escaped_stops_near_capacity() -> None:
    writer = OutputWriter(10)

    write_escaped(writer, b'abcdef"')

    assert writer.getvalue() == b"abcd"


def test_output_text_decodes() -> None:
    result = compile_markup("div\tdata\tcafé".encode("utf-8"))

    assert result.compact_text == '<div data="café">\n\n</div>'


def test_display_wrap_counts_bytes_not_characters() -> None:
    result = compile_markup(b"d\tab\t" + "é".encode("utf-8") * 40)

    assert all(len(line) <= 42 for line in result.display.split(b"\n"))
    assert "\ufffd" in result.display_text
    assert "\ufffd" not in result.compact_text
