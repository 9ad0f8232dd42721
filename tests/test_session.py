"""Tests for typeflow.core.session – live metrics and the session lifecycle."""

from __future__ import annotations

import pytest

from typeflow.core import session as sess
from typeflow.core.session import (
    Session,
    SessionResult,
    SessionState,
    SessionTracker,
    accuracy_for,
    count_errors,
    word_count,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _type_sequence(text: str, inputs: list[str], start_at: float = 0.0) -> Session:
    s = sess.start(text)
    for i, value in enumerate(inputs):
        s = sess.on_input(s, value, now=start_at + i)
    return s


# ---------------------------------------------------------------------------
# Metric helpers
# ---------------------------------------------------------------------------

class TestWordCount:
    def test_empty(self):
        assert word_count("") == 0

    def test_whitespace_only(self):
        assert word_count("   \t ") == 0

    def test_runs_of_whitespace(self):
        assert word_count("  hello   world  ") == 2

    def test_partial_word_counts(self):
        assert word_count("The qu") == 2


class TestCountErrors:
    def test_no_errors(self):
        assert count_errors("ca", "cat") == 0

    def test_mismatch(self):
        assert count_errors("cbt", "cat") == 1

    def test_overtyped_chars_are_errors(self):
        assert count_errors("abcd", "ab") == 2

    def test_overtyped_and_mismatched(self):
        assert count_errors("xbcd", "ab") == 3


class TestAccuracyFor:
    def test_empty_input_is_perfect(self):
        assert accuracy_for(0, 0) == 100

    def test_rounds(self):
        assert accuracy_for(3, 1) == 67

    def test_all_wrong(self):
        assert accuracy_for(3, 3) == 0

    def test_half_rounds_up(self):
        # 5/8 = 62.5%
        assert accuracy_for(8, 3) == 63


# ---------------------------------------------------------------------------
# start
# ---------------------------------------------------------------------------

class TestStart:
    def test_fresh_session(self):
        s = sess.start("cat")
        assert s.state is SessionState.IDLE
        assert s.typed == ""
        assert s.wpm == 0
        assert s.accuracy == 100
        assert s.error_count == 0
        assert s.elapsed_ms == 0.0
        assert s.result is None

    def test_empty_text_rejected(self):
        with pytest.raises(ValueError):
            sess.start("")


# ---------------------------------------------------------------------------
# on_input
# ---------------------------------------------------------------------------

class TestOnInput:
    def test_first_char_activates(self):
        s = sess.on_input(sess.start("cat"), "c", now=5.0)
        assert s.state is SessionState.ACTIVE
        assert s.started_at == 5.0

    def test_empty_input_stays_idle(self):
        s = sess.on_input(sess.start("cat"), "", now=5.0)
        assert s.state is SessionState.IDLE
        assert s.started_at is None
        assert s.accuracy == 100

    def test_start_time_not_reset_by_later_input(self):
        s = _type_sequence("cats", ["c", "ca", "cat"], start_at=2.0)
        assert s.started_at == 2.0

    def test_cat_example(self):
        s = sess.start("cat")
        s = sess.on_input(s, "c", now=10.0)
        s = sess.on_input(s, "ca", now=10.5)
        assert s.state is SessionState.ACTIVE
        s = sess.on_input(s, "cbt", now=11.5)
        assert s.state is SessionState.FINISHED
        assert s.error_count == 1
        assert s.accuracy == 67
        assert s.result == SessionResult(
            wpm=0, accuracy=67, error_count=1, elapsed_seconds=1.5, text_length=3
        )

    def test_not_finished_before_full_length(self):
        s = _type_sequence("hello", ["h", "he", "hel", "hell"])
        assert s.state is SessionState.ACTIVE
        assert s.result is None

    def test_backspace_reduces_errors(self):
        s = _type_sequence("hello", ["h", "hx", "h"])
        assert s.error_count == 0
        assert s.accuracy == 100

    def test_completing_input_uses_its_own_accuracy(self):
        s = _type_sequence("abc", ["a", "ab"])
        assert s.accuracy == 100
        s = sess.on_input(s, "abx", now=3.0)
        assert s.result is not None
        assert s.result.accuracy == 67
        assert s.result.error_count == 1

    def test_paste_past_end(self):
        s = sess.on_input(sess.start("ab"), "abcd", now=1.0)
        assert s.state is SessionState.FINISHED
        assert s.error_count == 2
        assert s.accuracy == 50
        assert s.result.text_length == 2

    def test_paste_from_idle_finishes_with_zero_elapsed(self):
        s = sess.on_input(sess.start("ab"), "ab", now=1.0)
        assert s.result.elapsed_seconds == 0.0

    def test_input_after_finish_ignored(self):
        s = _type_sequence("ab", ["a", "ab"])
        again = sess.on_input(s, "abzzz", now=9.0)
        assert again is s

    def test_error_count_bounded_by_typed_length(self):
        s = sess.start("abc")
        for value in ["x", "xy", "xyz"]:
            s = sess.on_input(s, value, now=0.0)
            assert 0 <= s.error_count <= len(s.typed)
            assert 0 <= s.accuracy <= 100

    def test_sessions_are_immutable(self):
        s = sess.start("cat")
        sess.on_input(s, "c", now=0.0)
        assert s.typed == ""
        with pytest.raises(AttributeError):
            s.typed = "c"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# tick
# ---------------------------------------------------------------------------

class TestTick:
    def test_computes_wpm(self):
        s = _type_sequence("hello world again", ["h", "hello world"])
        s = sess.tick(s, 30000)
        # 2 words in half a minute
        assert s.wpm == 4
        assert s.elapsed_ms == 30000

    def test_zero_elapsed_leaves_wpm(self):
        s = _type_sequence("hello world again", ["hello world"])
        s = sess.tick(s, 30000)
        assert sess.tick(s, 0) is s

    def test_idle_session_not_ticked(self):
        s = sess.start("cat")
        assert sess.tick(s, 1000) is s

    def test_finished_session_not_ticked(self):
        s = _type_sequence("hello world", ["hello", "hello world"])
        assert sess.tick(s, 60000) is s

    def test_wpm_frozen_at_completion(self):
        s = _type_sequence("hello world!", ["hello world"])
        s = sess.tick(s, 30000)
        s = sess.on_input(s, "hello world!", now=31.0)
        assert s.result.wpm == 4
        s = sess.tick(s, 120000)
        assert s.wpm == 4
        assert s.result.wpm == 4


# ---------------------------------------------------------------------------
# SessionTracker
# ---------------------------------------------------------------------------

class TestSessionTracker:
    def test_no_session_initially(self):
        tracker = SessionTracker()
        assert tracker.session is None
        assert tracker.result is None
        assert not tracker.is_active()
        assert not tracker.is_finished()

    def test_input_before_start(self):
        with pytest.raises(RuntimeError):
            SessionTracker().on_input("a")

    def test_tick_before_start(self):
        with pytest.raises(RuntimeError):
            SessionTracker().tick(100)

    def test_result_returned_once(self):
        tracker = SessionTracker()
        tracker.start("ab")
        assert tracker.on_input("a", now=0.0) is None
        assert tracker.is_active()
        result = tracker.on_input("ab", now=2.0)
        assert result is not None
        assert result.elapsed_seconds == 2.0
        assert tracker.is_finished()
        assert tracker.on_input("abc", now=3.0) is None
        assert tracker.result == result

    def test_start_replaces_finished_session(self):
        tracker = SessionTracker()
        tracker.start("ab")
        tracker.on_input("ab", now=0.0)
        tracker.start("cd")
        assert tracker.session.state is SessionState.IDLE
        assert tracker.result is None

    def test_tick_updates_session(self):
        tracker = SessionTracker()
        tracker.start("one two three")
        tracker.on_input("one two", now=0.0)
        assert tracker.tick(60000).wpm == 2
