import pytest
from hypothesis import given
from hypothesis import strategies as st

from ccfront.ccfront_brackets import BracketTracker
from ccfront.ccfront_errors import MismatchedBracketError


def test_new_tracker_is_empty() -> None:
    tracker = BracketTracker()
    assert tracker.is_empty()
    assert len(tracker) == 0
    assert tracker.top() is None
    tracker.check_balanced()


def test_push_and_pop() -> None:
    tracker = BracketTracker()
    tracker.push("{", 1)
    tracker.push("(", 3)
    assert tracker.top() == ("(", 3)
    assert tracker.pop(")") == 3
    assert tracker.pop("}") == 1
    assert tracker.is_empty()


def test_pop_wrong_closer() -> None:
    tracker = BracketTracker()
    tracker.push("{", 2)
    with pytest.raises(ValueError, match="opened at line 2"):
        tracker.pop(")")
    assert tracker.top() == ("{", 2)


def test_pop_empty() -> None:
    with pytest.raises(IndexError):
        BracketTracker().pop("}")


def test_push_rejects_non_openers() -> None:
    with pytest.raises(ValueError):
        BracketTracker().push(")", 1)


def test_check_balanced_reports_innermost() -> None:
    tracker = BracketTracker()
    tracker.push("{", 1)
    tracker.push("{", 4)
    with pytest.raises(MismatchedBracketError) as exc:
        tracker.check_balanced()
    assert exc.value.line == 4
    assert exc.value.bracket == "{"


def test_repr() -> None:
    tracker = BracketTracker()
    tracker.push("(", 5)
    assert repr(tracker) == "BracketTracker([(@5])"


@given(st.lists(st.tuples(st.sampled_from("({"), st.integers(min_value=1))))  # type: ignore[misc]
def test_stacks_stay_in_lockstep(entries: list[tuple[str, int]]) -> None:
    tracker = BracketTracker()
    for bracket, line in entries:
        tracker.push(bracket, line)
        assert len(tracker.openers) == len(tracker.lines)
    closers = {"(": ")", "{": "}"}
    for bracket, line in reversed(entries):
        assert tracker.pop(closers[bracket]) == line
        assert len(tracker.openers) == len(tracker.lines)
    assert tracker.is_empty()
