"""Tab-delimited input to markup: tokenizer, classifier and serializer."""

from .classifier import classify
from .compiler import compile_markup, parse_input
from .escape import escape_value, write_escaped
from .models import Attribute, OutputText, ParsedInput, RenderMode, Token, decode
from .sanitize import sanitize_name
from .serializer import (
    OutputWriter,
    WrappingWriter,
    render,
    render_compact,
    render_display,
)
from .tokenizer import tokenize

__all__ = [
    "Attribute",
    "OutputText",
    "ParsedInput",
    "RenderMode",
    "Token",
    "decode",
    "tokenize",
    "sanitize_name",
    "classify",
    "escape_value",
    "write_escaped",
    "OutputWriter",
    "WrappingWriter",
    "render",
    "render_compact",
    "render_display",
    "parse_input",
    "compile_markup",
]
