"""Tests for step ordering."""

from __future__ import annotations

import pytest

from moxiu_installer.pipeline import run_pipeline


class FakeStep:
    def __init__(self, step_id: str, log: list, *, enabled: bool = True) -> None:
        self.step_id = step_id
        self.log = log
        self._enabled = enabled

    def enabled(self, ctx) -> bool:
        return self._enabled

    def run(self, ctx) -> None:
        assert ctx.state["current_step"] == self.step_id
        self.log.append(self.step_id)


def test_runs_in_order_and_skips_disabled(make_ctx) -> None:
    log: list = []
    ctx = make_ctx()
    steps = [FakeStep("a", log), FakeStep("b", log, enabled=False), FakeStep("c", log)]

    result = run_pipeline(ctx=ctx, steps=steps)

    assert log == ["a", "c"]
    assert result.ran_steps == ["a", "c"]
    assert result.skipped_steps == ["b"]
    assert ctx.state["current_step"] is None


def test_failing_step_stops_the_run(make_ctx) -> None:
    log: list = []

    class Boom(FakeStep):
        def run(self, ctx) -> None:
            raise RuntimeError("boom")

    ctx = make_ctx()
    steps = [FakeStep("a", log), Boom("b", log), FakeStep("c", log)]

    with pytest.raises(RuntimeError):
        run_pipeline(ctx=ctx, steps=steps)

    assert log == ["a"]
    assert ctx.state["current_step"] == "b"
