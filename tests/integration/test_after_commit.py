"""After-commit callbacks on the write-session dependency."""

import pytest

from app.infrastructure.persistence.database import (
    call_after_commit,
    get_db_transactional,
    run_after_commit,
)


class TestAfterCommit:
    async def test_runs_only_after_commit(self) -> None:
        calls: list[str] = []

        async def _record() -> None:
            calls.append("ran")

        gen = get_db_transactional()
        session = await gen.__anext__()
        call_after_commit(session, _record)
        assert calls == []

        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()
        assert calls == ["ran"]

    async def test_dropped_on_rollback(self) -> None:
        calls: list[str] = []

        async def _record() -> None:
            calls.append("ran")

        gen = get_db_transactional()
        session = await gen.__anext__()
        call_after_commit(session, _record)

        with pytest.raises(RuntimeError):
            await gen.athrow(RuntimeError("boom"))
        assert calls == []

    async def test_failing_callback_does_not_stop_the_rest(self, db_session) -> None:
        calls: list[str] = []

        async def _fail() -> None:
            raise ConnectionError("cache down")

        async def _record() -> None:
            calls.append("ran")

        call_after_commit(db_session, _fail)
        call_after_commit(db_session, _record)
        await run_after_commit(db_session)
        assert calls == ["ran"]

        await run_after_commit(db_session)
        assert calls == ["ran"]
