"""Tab-delimited input to markup compiler with undo/redo editing."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "dispatch",
    "keymaps",
    "limits",
    "markup",
    "runtime",
    "session",
    "submit",
]

__version__ = "0.1.0"
