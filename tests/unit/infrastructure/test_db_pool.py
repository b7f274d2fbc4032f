"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close)
  - Offline unit tests (no real DB)
"""

from unittest.mock import MagicMock, patch

import pytest

from taskboard.infrastructure.db import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
    close_pool,
    get_pool,
    init_pool,
)


@pytest.fixture(autouse=True)
def _clean_pool():
    close_pool()
    yield
    close_pool()


@pytest.mark.unit
class TestPoolLifecycle:
    def test_init_pool_creates_pool(self):
        with patch("taskboard.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            result = init_pool("postgresql://test", min_size=1, max_size=5)

            assert result is mock_pool
            assert get_pool() is mock_pool
            kwargs = MockPool.call_args.kwargs
            assert kwargs["min_size"] == 1
            assert kwargs["max_size"] == 5

    def test_init_pool_twice_raises(self):
        with patch("taskboard.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=5)

            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=1, max_size=5)

    def test_get_pool_without_init_raises(self):
        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_close_pool_clears_singleton(self):
        with patch("taskboard.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool
            init_pool("postgresql://test", min_size=1, max_size=5)

            close_pool()

            mock_pool.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()

    def test_statement_timeout_is_applied_on_connect(self):
        with patch("taskboard.infrastructure.db.pool.ConnectionPool") as MockPool:
            init_pool(
                "postgresql://test", min_size=1, max_size=5, statement_timeout_ms=1500
            )
            configure = MockPool.call_args.kwargs["configure"]
            conn = MagicMock()

            configure(conn)

            conn.execute.assert_called_once_with("SET statement_timeout = 1500")
