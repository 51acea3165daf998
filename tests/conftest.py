from fastapi.testclient import TestClient
from core.settings import settings
from helpers.utils.room_manager import Connection, RoomManager, room_manager
from helpers.utils.signaling_relay import SignalingRelay
import asyncio
import pytest

ADMIN_HEADERS = {"X-Admin-Token": "test-admin-token"}

def drain(connection: Connection) -> list:
  """Pop everything queued for a connection, in order."""
  messages = []
  while True:
    try:
      message = connection.outbox.get_nowait()
    except asyncio.QueueEmpty:
      return messages
    if message is not None:
      messages.append(message)

@pytest.fixture
def manager():
  return RoomManager("default")

@pytest.fixture
def relay(manager):
  return SignalingRelay(manager)

@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
  monkeypatch.setattr(settings, "RECORDINGS_DIR", str(tmp_path / "recordings"))
  monkeypatch.setattr(settings, "ADMIN_TOKEN", ADMIN_HEADERS["X-Admin-Token"])
  room_manager.rooms = {room_manager.default_room: {}}
  room_manager.connections = {}
  yield

@pytest.fixture
def client():
  from routes.main import app
  with TestClient(app) as test_client:
    yield test_client
