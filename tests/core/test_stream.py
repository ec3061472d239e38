"""Tests for the reactive primitives."""

from typing import List

import pytest

from calgrid.stream import NO_VALUE, Memo, Signal, Stream


class TestStream:
    def test_starts_without_value(self) -> None:
        stream: Stream[int] = Stream("numbers")
        assert not stream.has_value
        with pytest.raises(LookupError):
            stream.value

    def test_publish_forwards_changes_only(self) -> None:
        stream: Stream[int] = Stream("numbers")
        received: List[int] = []
        stream.subscribe(received.append)

        assert stream.publish(1) is True
        assert stream.publish(1) is False
        assert stream.publish(2) is True

        assert received == [1, 2]
        assert stream.emissions == 2

    def test_subscribe_replays_latest_value(self) -> None:
        stream: Stream[str] = Stream("words", initial="hello")
        received: List[str] = []
        stream.subscribe(received.append)
        assert received == ["hello"]

    def test_none_is_a_real_value(self) -> None:
        stream: Stream[None] = Stream("maybe", initial=None)
        assert stream.has_value
        assert stream.publish(None) is False

    def test_unsubscribe(self) -> None:
        stream: Stream[int] = Stream("numbers")
        received: List[int] = []
        unsubscribe = stream.subscribe(received.append)
        stream.publish(1)
        unsubscribe()
        stream.publish(2)
        assert received == [1]

    def test_structural_equality_gates(self) -> None:
        stream: Stream[tuple] = Stream("tuples")
        stream.publish((1, 2))
        assert stream.publish((1, 2)) is False


class TestSignal:
    def test_emit_calls_every_listener(self) -> None:
        signal = Signal("changed")
        calls: List[str] = []
        signal.connect(lambda: calls.append("a"))
        disconnect = signal.connect(lambda: calls.append("b"))

        signal.emit()
        disconnect()
        signal.emit()

        assert calls == ["a", "b", "a"]
        assert signal.listener_count == 1


class TestMemo:
    def test_recomputes_only_on_new_arguments(self) -> None:
        memo = Memo(lambda a, b: a + b)
        assert memo(1, 2) == 3
        assert memo(1, 2) == 3
        assert memo.calls == 1
        assert memo(2, 2) == 4
        assert memo.calls == 2

    def test_reset(self) -> None:
        memo = Memo(lambda a: a * 2)
        memo(3)
        memo.reset()
        memo(3)
        assert memo.calls == 2

    def test_no_value_sentinel_is_falsy(self) -> None:
        assert not NO_VALUE
        assert repr(NO_VALUE) == "NO_VALUE"
