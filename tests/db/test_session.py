from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from dbsnapdiff.db.session import DbSession


@pytest.fixture
def mock_engine() -> MagicMock:
    engine = MagicMock(name="engine")
    result = engine.connect.return_value.execute.return_value
    result.mappings.return_value = [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]
    return engine


def test_fetch_all_returns_dicts_in_order(mock_engine: MagicMock) -> None:
    with DbSession(mock_engine) as session:
        rows = session.fetch_all("SELECT * FROM `t`")

    assert rows == [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]


def test_fetch_all_binds_parameters(mock_engine: MagicMock) -> None:
    with DbSession(mock_engine) as session:
        session.fetch_all("SELECT * FROM t WHERE id = :id", {"id": 1})

    stmt, params = mock_engine.connect.return_value.execute.call_args.args
    assert str(stmt) == "SELECT * FROM t WHERE id = :id"
    assert params == {"id": 1}


def test_transaction_always_rolled_back(mock_engine: MagicMock) -> None:
    conn = mock_engine.connect.return_value

    with DbSession(mock_engine) as session:
        session.fetch_all("SELECT 1")

    conn.begin.return_value.rollback.assert_called_once()
    conn.begin.return_value.commit.assert_not_called()
    conn.close.assert_called_once()


def test_connection_closed_when_body_raises(mock_engine: MagicMock) -> None:
    conn = mock_engine.connect.return_value

    with pytest.raises(RuntimeError, match="boom"):
        with DbSession(mock_engine):
            raise RuntimeError("boom")

    conn.close.assert_called_once()


def test_nested_usage_raises_runtime_error(mock_engine: MagicMock) -> None:
    with DbSession(mock_engine) as session:
        with pytest.raises(RuntimeError):
            with session:
                pass


def test_use_outside_context_raises(mock_engine: MagicMock) -> None:
    with pytest.raises(RuntimeError):
        DbSession(mock_engine).fetch_all("SELECT 1")
