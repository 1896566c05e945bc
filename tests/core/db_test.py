from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.core.db import engine, get_session, meta, ping_database


class TestDatabaseEngine:
    def test_engine_is_async(self):
        assert isinstance(engine, AsyncEngine)
        assert engine.dialect.is_async

    def test_naming_convention(self):
        assert meta.naming_convention["pk"] == "pk_%(table_name)s"
        assert meta.schema is None


@pytest.mark.anyio
class TestPingDatabase:
    async def test_ping_success(self):
        test_engine = create_async_engine("sqlite+aiosqlite://")

        assert await ping_database(test_engine) is True

        await test_engine.dispose()

    async def test_ping_failure_logged(self):
        broken_engine = MagicMock(spec=AsyncEngine)
        broken_engine.connect.side_effect = OSError("connection refused")

        with patch("app.core.db.logger") as mock_logger:
            assert await ping_database(broken_engine) is False

        mock_logger.error.assert_called_once()
        assert "connection refused" in mock_logger.error.call_args[0][0]


@pytest.mark.anyio
class TestGetSession:
    async def _drive(self, session: AsyncMock, error: Exception | None = None):
        factory = MagicMock()
        factory.return_value.__aenter__.return_value = session

        with patch("app.core.db.async_session_factory", factory):
            generator = get_session()
            assert await generator.__anext__() is session

            if error is None:
                with pytest.raises(StopAsyncIteration):
                    await generator.__anext__()
            else:
                with pytest.raises(type(error)):
                    await generator.athrow(error)

    async def test_commit_on_success(self):
        session = AsyncMock()

        await self._drive(session)

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    async def test_rollback_on_error(self):
        session = AsyncMock()

        await self._drive(session, ValueError("boom"))

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()
