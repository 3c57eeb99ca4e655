"""Tests for the Outcome helpers."""

from bos.domain.outcome import Failure, Success, handle, is_successful


class TestHandle:

    def test_success_branch(self):
        assert handle(Success(2), lambda v: v * 10, lambda m: m) == 20

    def test_failure_branch(self):
        assert handle(Failure("boom"), lambda v: v, lambda m: f"error: {m}") == "error: boom"

    def test_is_successful(self):
        assert is_successful(Success(None))
        assert not is_successful(Failure("nope"))
