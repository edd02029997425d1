from __future__ import annotations

import asyncio
from typing import List

from tag_engine.adapters.textual import TextualTagAdapter, TextualUIHooks
from tag_engine.buffer import SessionMirror
from tag_engine.dispatch import KeyDispatcher
from tag_engine.markup import RenderMode
from tag_engine.submit import Submission


def make_adapter(**hook_overrides) -> tuple[TextualTagAdapter, List[SessionMirror]]:
    views: List[SessionMirror] = []
    hooks = TextualUIHooks(update_view=views.append, **hook_overrides)
    return TextualTagAdapter(KeyDispatcher(), hooks), views


def test_adapter_updates_view_and_status() -> None:
    statuses: List[str] = []
    adapter, views = make_adapter(update_status=statuses.append)

    for char in "div":
        adapter.handle_textual_key(char, text=char)

    assert views[-1].text == "div"
    assert views[-1].display == "<div>\n\n\n</div>"
    assert statuses[0] == "regular tags | undo:1 | redo:0"
    assert statuses[-1] == "regular tags | undo:4 | redo:0 | insert"


def test_adapter_parses_textual_chords() -> None:
    statuses: List[str] = []
    adapter, _ = make_adapter(update_status=statuses.append)

    adapter.handle_textual_key("ctrl+s")

    assert statuses[-1].startswith("self-closing tags")


def test_adapter_submits_and_quits() -> None:
    submissions: List[Submission] = []
    quits: List[bool] = []
    adapter, _ = make_adapter(
        handle_submission=submissions.append,
        request_quit=lambda: quits.append(True),
    )
    adapter.handle_textual_key("b", text="b")

    adapter.handle_textual_key("ctrl+enter")

    assert submissions[-1].data == b"<b>\n\n</b>"
    assert quits == [True]


def test_adapter_paste_and_host_edit() -> None:
    adapter, views = make_adapter()
    adapter.push_host_edit("a\t")

    adapter.handle_paste("x & y")

    assert views[-1].compact == "<a x_~_y>\n\n</a>"
    assert adapter.pull_buffer().text == "a\tx & y"


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter, _ = make_adapter(log=logs.append)

    adapter.handle_textual_key("a", text="a")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)


def test_app_routes_keys_into_session() -> None:
    from tag_engine.adapters.textual.app import TagEngineApp

    app = TagEngineApp()

    async def drive() -> None:
        async with app.run_test() as pilot:
            await pilot.press("d", "i", "v", "tab", "c", "tab", "x")
            assert app.session.buffer.data == b"div\tc\tx"
            await pilot.press("ctrl+s", "ctrl+z")
            assert app.session.buffer.data == b"div\tc\t"
            await pilot.press("backspace")
            await pilot.pause()

    asyncio.run(drive())

    assert app.session.buffer.data == b"div\tc"
    assert app.session.mode is RenderMode.SELF_CLOSING
