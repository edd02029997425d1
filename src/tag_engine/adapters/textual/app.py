"""Executable Textual app that hosts the tag engine."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use tag_engine.adapters.textual.app"
    ) from exc

from tag_engine.buffer import SessionMirror
from tag_engine.dispatch import KeyDispatcher
from tag_engine.limits import Limits
from tag_engine.markup import RenderMode
from tag_engine.runtime import telemetry
from tag_engine.session import EditingSession
from tag_engine.submit import SubmitAction, Submission

from .controller import TextualTagAdapter, TextualUIHooks


class TagEngineApp(App[Optional[Submission]]):
    """Single-line tag editor: type, tab between fields, submit."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#input-line {
		height: 3;
		border: round $accent;
		padding: 0 1;
	}

	#markup-view {
		height: 1fr;
		border: round $secondary;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, *, session: Optional[EditingSession] = None) -> None:
        super().__init__()
        self.session = session or EditingSession()
        self.adapter: TextualTagAdapter | None = None
        self._input_widget: Static | None = None
        self._markup_widget: Static | None = None
        self._status_widget: Static | None = None
        self._result: Optional[Submission] = None
        self._telemetry_log = telemetry.get_logger("tag_engine.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Vertical(id="editor"):
            self._input_widget = Static("", id="input-line", markup=False)
            yield self._input_widget
            self._markup_widget = Static("", id="markup-view", markup=False)
            yield self._markup_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            handle_submission=self._handle_submission,
            request_quit=self._request_quit,
            log=self._log_line,
        )
        self.adapter = TextualTagAdapter(KeyDispatcher(self.session), hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+c":
            return
        text = event.character if event.is_printable else None
        self.adapter.handle_textual_key(event.key, text=text)
        event.prevent_default()
        event.stop()

    async def on_paste(self, event: events.Paste) -> None:
        if not self.adapter:
            return
        self.adapter.handle_paste(event.text)
        event.stop()

    def _update_view(self, mirror: SessionMirror) -> None:
        if self._input_widget:
            self._input_widget.update(mirror.text.replace("\t", " → "))
        if self._markup_widget:
            self._markup_widget.update(mirror.display)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_submission(self, submission: Submission) -> None:
        if submission.is_empty:
            self._telemetry_log.warning("Nothing to submit; buffer has no tag name")
            return
        if submission.action is SubmitAction.CLIPBOARD:
            self.copy_to_clipboard(submission.text)
        self._result = submission

    def _request_quit(self) -> None:
        self.exit(self._result)

    def _log_line(self, line: str) -> None:
        self._telemetry_log.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Turn tab-separated words into a markup tag."
    )
    parser.add_argument(
        "--self-closing",
        action="store_true",
        default=os.environ.get("TAG_ENGINE_SELF_CLOSING", "") == "1",
        help="Start in self-closing mode (toggle with ctrl+s)",
    )
    parser.add_argument(
        "--wrap-column",
        type=int,
        default=None,
        help="Column at which the preview wraps (default: TAG_ENGINE_WRAP_COLUMN or 42)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        default=None,
        help="telelog preset to apply before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    limits = Limits.from_env()
    if args.wrap_column is not None:
        limits = limits.evolve(wrap_column=args.wrap_column)
    mode = RenderMode.SELF_CLOSING if args.self_closing else RenderMode.REGULAR
    app = TagEngineApp(session=EditingSession(limits=limits, mode=mode))
    submission = app.run()
    if submission is not None and submission.action is SubmitAction.TYPE:
        # no keystroke injection here; the typing collaborator reads stdout
        sys.stdout.write(submission.text)
        sys.stdout.flush()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
