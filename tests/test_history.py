from __future__ import annotations

import pytest

from tag_engine.buffer import BoundedStack, HistoryStacks, Snapshot


def test_bounded_stack_evicts_oldest() -> None:
    stack: BoundedStack[int] = BoundedStack(3)

    evicted = [stack.push(item) for item in (1, 2, 3, 4)]

    assert evicted == [None, None, None, 1]
    assert list(stack) == [2, 3, 4]
    assert stack.pop() == 4
    assert stack.peek() == 3


def test_bounded_stack_pop_empty_returns_none() -> None:
    stack: BoundedStack[int] = BoundedStack(1)

    assert stack.pop() is None
    assert stack.peek() is None


def test_bounded_stack_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError):
        BoundedStack(0)


def test_snapshot_is_a_value_copy() -> None:
    data = bytearray(b"abc")

    snapshot = Snapshot.capture(data)
    data[0] = ord("z")

    assert snapshot.data == b"abc"
    assert snapshot.length == 3


def test_undo_then_redo_round_trip() -> None:
    history = HistoryStacks()
    history.push_undo(b"hello")

    restored = history.undo(b"world")

    assert restored == Snapshot(b"hello")
    assert history.can_redo()
    assert history.redo(b"hello") == Snapshot(b"world")
    assert history.undo_depth == 1
    assert history.redo_depth == 0


def test_undo_on_empty_stack_leaves_redo_alone() -> None:
    history = HistoryStacks()

    assert history.undo(b"current") is None
    assert history.redo(b"current") is None
    assert history.redo_depth == 0


def test_depth_is_bounded_and_evictions_counted() -> None:
    history = HistoryStacks(2)

    for data in (b"a", b"b", b"c"):
        history.push_undo(data)

    assert history.undo_depth == 2
    assert history.evictions == 1
    assert [s.data for s in history.undo_stack] == [b"b", b"c"]


def test_default_depth_is_fifty() -> None:
    history = HistoryStacks()

    for index in range(60):
        history.push_undo(b"%d" % index)

    assert history.undo_depth == 50
    assert history.undo_stack.peek() == Snapshot(b"59")


def test_push_undo_does_not_clear_redo() -> None:
    history = HistoryStacks()
    history.push_undo(b"x")
    history.undo(b"y")

    history.push_undo(b"z")

    assert history.redo_depth == 1


def test_snapshots_are_capped_to_capacity() -> None:
    history = HistoryStacks(snapshot_capacity=4)

    history.push_undo(b"abcdef")

    assert history.undo_stack.peek() == Snapshot(b"abcd")
