"""Tests for the MongoDB connection manager."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from svg_holder.db.mongo import ConnectionState, MongoManager
from svg_holder.exceptions import NotConnectedError, StoreConnectionError


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    client.close = AsyncMock()
    return client


@pytest.fixture
def manager(mock_client):
    manager = MongoManager(timeout_ms=100)
    manager._create_client = MagicMock(return_value=mock_client)
    return manager


def test_starts_disconnected():
    manager = MongoManager()
    assert manager.state is ConnectionState.DISCONNECTED
    assert not manager.is_connected


def test_get_database_before_connect():
    with pytest.raises(NotConnectedError):
        MongoManager().get_database()


@pytest.mark.asyncio
async def test_connect_pings_and_exposes_database(manager, mock_client):
    database = await manager.connect("mongodb://db:27017", "svgs_db")

    assert manager.state is ConnectionState.CONNECTED
    assert manager.get_database() is database
    mock_client.admin.command.assert_awaited_once_with("ping")
    mock_client.__getitem__.assert_called_with("svgs_db")


@pytest.mark.asyncio
async def test_connect_is_idempotent(manager):
    first = await manager.connect("mongodb://db:27017", "svgs_db")
    second = await manager.connect("mongodb://db:27017", "svgs_db")

    assert first is second
    manager._create_client.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [ServerSelectionTimeoutError("no servers"), OperationFailure("auth failed", code=18)],
)
async def test_connect_failure(manager, mock_client, error):
    mock_client.admin.command.side_effect = error

    with pytest.raises(StoreConnectionError):
        await manager.connect("mongodb://db:27017", "svgs_db")

    assert manager.state is ConnectionState.DISCONNECTED
    mock_client.close.assert_awaited_once()
    with pytest.raises(NotConnectedError):
        manager.get_database()


@pytest.mark.asyncio
async def test_connection_error_is_builtin_connection_error(manager, mock_client):
    mock_client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
    with pytest.raises(ConnectionError):
        await manager.connect("mongodb://db:27017", "svgs_db")


@pytest.mark.asyncio
async def test_close_twice_is_noop(manager, mock_client):
    await manager.connect("mongodb://db:27017", "svgs_db")

    await manager.close()
    await manager.close()

    assert manager.state is ConnectionState.DISCONNECTED
    mock_client.close.assert_awaited_once()
    with pytest.raises(NotConnectedError):
        manager.get_collection("svgs")


@pytest.mark.asyncio
async def test_close_before_connect_is_noop():
    manager = MongoManager()
    await manager.close()
    assert manager.state is ConnectionState.DISCONNECTED


@pytest.mark.asyncio
async def test_close_error_still_disconnects(manager, mock_client):
    await manager.connect("mongodb://db:27017", "svgs_db")
    mock_client.close.side_effect = RuntimeError("socket gone")

    await manager.close()

    assert manager.state is ConnectionState.DISCONNECTED


@pytest.mark.asyncio
async def test_ping(manager, mock_client):
    await manager.connect("mongodb://db:27017", "svgs_db")
    database = manager.get_database()
    database.command = AsyncMock(return_value={"ok": 1})

    await manager.ping()

    database.command.assert_awaited_once_with("ping")


@pytest.mark.asyncio
async def test_ping_when_disconnected():
    with pytest.raises(NotConnectedError):
        await MongoManager().ping()
