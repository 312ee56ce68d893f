"""Unit tests for docvault.engine.context — ExecutionContext."""

from docvault.engine.context import (
    ExecutionContext,
    clear_execution_context,
    get_execution_context,
    set_execution_context,
)


class TestExecutionContext:

    def test_basic_creation(self):
        ctx = ExecutionContext(user_id="u1")
        assert ctx.user_id == "u1"
        assert ctx.execution_id.startswith("exec_")
        assert len(ctx.execution_id) == 17  # "exec_" + 12 hex chars

    def test_to_dict(self):
        d = ExecutionContext(user_id="u1").to_dict()
        assert d["user_id"] == "u1"
        assert "execution_id" in d
        assert "role" not in d


class TestContextVar:

    def test_default_none(self):
        assert get_execution_context() is None

    def test_set_and_get(self):
        ctx = ExecutionContext(user_id="u1")
        set_execution_context(ctx)
        assert get_execution_context() is ctx

    def test_clear(self):
        set_execution_context(ExecutionContext(user_id="u1"))
        clear_execution_context()
        assert get_execution_context() is None
