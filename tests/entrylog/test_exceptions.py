"""Tests for exception and cause-chain extraction."""

from __future__ import annotations

import logging

import pytest

from packages.entrylog import ExceptionFieldExtractor


class PaymentDeclinedError(Exception):
    """Module-level exception used to check qualified type names."""


def _raise_value_error() -> None:
    """Raise a ValueError from a known line."""
    raise ValueError("boom")


def _raised_chain() -> ValueError:
    """Return a raised ValueError explicitly chained to a LookupError."""
    try:
        try:
            raise LookupError("inner")
        except LookupError as inner:
            raise ValueError("outer") from inner
    except ValueError as exc:
        return exc


def _depth(extracted: dict | None) -> int:
    """Count nested exception levels."""
    depth = 0
    while extracted is not None:
        depth += 1
        extracted = extracted["exception_cause"]
    return depth


def test_extract_nests_cause_and_terminates_with_none() -> None:
    """E1 caused by E2 should nest E2, whose cause is None."""
    root = LookupError("root")
    outer = RuntimeError("outer")
    outer.__cause__ = root

    extracted = ExceptionFieldExtractor().extract(outer)

    assert extracted["exception_message"] == "outer"
    assert extracted["exception_type"] == "RuntimeError"
    assert extracted["exception_cause"] == {
        "exception_message": "root",
        "exception_stack_trace": "",
        "exception_line_number": None,
        "exception_type": "LookupError",
        "exception_cause": None,
    }


def test_extract_key_order_is_stable() -> None:
    """Extracted keys should always come out in the same order."""
    extracted = ExceptionFieldExtractor().extract(ValueError("x"))

    assert list(extracted) == [
        "exception_message",
        "exception_stack_trace",
        "exception_line_number",
        "exception_type",
        "exception_cause",
    ]


def test_extract_reads_traceback_of_raised_exception() -> None:
    """Raised exceptions should carry stack text and the originating line."""
    with pytest.raises(ValueError) as exc_info:
        _raise_value_error()

    extracted = ExceptionFieldExtractor().extract(exc_info.value)

    assert extracted["exception_line_number"] == (
        _raise_value_error.__code__.co_firstlineno + 2
    )
    assert "_raise_value_error" in extracted["exception_stack_trace"]


def test_extract_follows_explicit_cause_of_raised_chain() -> None:
    """raise ... from ... should be followed to the inner exception."""
    extracted = ExceptionFieldExtractor().extract(_raised_chain())

    cause = extracted["exception_cause"]
    assert cause["exception_type"] == "LookupError"
    assert cause["exception_message"] == "inner"
    assert cause["exception_cause"] is None


def test_extract_follows_implicit_context() -> None:
    """An exception raised while handling another should link to it."""
    try:
        try:
            raise LookupError("first")
        except LookupError:
            raise RuntimeError("second")
    except RuntimeError as exc:
        caught = exc

    extracted = ExceptionFieldExtractor().extract(caught)

    assert extracted["exception_cause"]["exception_message"] == "first"


def test_extract_honours_suppressed_context() -> None:
    """raise ... from None should hide the implicit context."""
    try:
        try:
            raise LookupError("hidden")
        except LookupError:
            raise RuntimeError("visible") from None
    except RuntimeError as exc:
        caught = exc

    assert ExceptionFieldExtractor().extract(caught)["exception_cause"] is None


def test_extract_qualifies_non_builtin_type_names() -> None:
    """Custom exceptions should be named with their module."""
    extracted = ExceptionFieldExtractor().extract(PaymentDeclinedError("declined"))

    assert extracted["exception_type"] == (
        f"{PaymentDeclinedError.__module__}.PaymentDeclinedError"
    )


def test_extract_stops_on_cyclic_chain(caplog: pytest.LogCaptureFixture) -> None:
    """A cycle should be cut at the first revisited exception."""
    first = RuntimeError("first")
    second = RuntimeError("second")
    first.__cause__ = second
    second.__cause__ = first

    with caplog.at_level(logging.WARNING, logger="entrylog"):
        extracted = ExceptionFieldExtractor().extract(first)

    assert extracted["exception_cause"]["exception_message"] == "second"
    assert extracted["exception_cause"]["exception_cause"] is None
    assert "cyclic" in caplog.text


def test_extract_caps_depth(caplog: pytest.LogCaptureFixture) -> None:
    """Chains longer than max_depth should be truncated at the cap."""
    errors = [RuntimeError(f"level-{index}") for index in range(6)]
    for outer, inner in zip(errors, errors[1:]):
        outer.__cause__ = inner

    with caplog.at_level(logging.WARNING, logger="entrylog"):
        extracted = ExceptionFieldExtractor(max_depth=3).extract(errors[0])

    assert _depth(extracted) == 3
    assert "truncated" in caplog.text


def test_default_depth_allows_long_chains() -> None:
    """The default cap should leave ordinary chains untouched."""
    errors = [RuntimeError(f"level-{index}") for index in range(10)]
    for outer, inner in zip(errors, errors[1:]):
        outer.__cause__ = inner

    assert _depth(ExceptionFieldExtractor().extract(errors[0])) == 10


def test_extractor_rejects_non_positive_depth() -> None:
    """max_depth must be at least one."""
    with pytest.raises(ValueError):
        ExceptionFieldExtractor(max_depth=0)
