from fastapi import WebSocket
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from core.settings import settings
from schemas.signaling.signaling_schema import (
  PRESENCE_EVENT,
  PEER_DISCONNECTED_EVENT,
  UNKNOWN_ROLE,
  PresenceEvent,
  PeerDisconnectedEvent,
  envelope,
)
from .generate_unique_id import generate_unique_id
import asyncio
import json
import logging

logger = logging.getLogger(__name__)

@dataclass(eq=False)
class Connection:
  """
  One participant's signaling channel. Owned by the RoomManager.
  """
  websocket: Optional[WebSocket] = None
  id: str = field(default_factory=generate_unique_id)
  role: Any = None
  room: Optional[str] = None
  connected: bool = True
  outbox: asyncio.Queue = field(default_factory=asyncio.Queue)

  def send(self, message: dict) -> bool:
    if not self.connected:
      return False
    self.outbox.put_nowait(message)
    return True

  async def pump(self):
    """
    Write queued messages to the websocket in order until the connection is removed.
    """
    while True:
      message = await self.outbox.get()
      if message is None:
        return
      try:
        await self.websocket.send_text(json.dumps(message))
      except Exception as e:
        # Socket went away between lookup and send, nothing left to deliver
        logger.debug(f"Dropping message for connection {self.id}: {e}")
        self.connected = False
        return

  def close(self):
    self.connected = False
    self.outbox.put_nowait(None)

class RoomManager:
  def __init__(self, default_room: str = settings.DEFAULT_ROOM):
    self.default_room = default_room
    # {room_name: {connection_id: Connection}}
    self.rooms: Dict[str, Dict[str, Connection]] = {default_room: {}}
    self.connections: Dict[str, Connection] = {}

  def connect(self, websocket: Optional[WebSocket] = None) -> Connection:
    connection = Connection(websocket=websocket)
    self.connections[connection.id] = connection
    logger.info(f"Connection {connection.id} opened")
    return connection

  def members(self, room_name: str) -> List[Connection]:
    return list(self.rooms.get(room_name, {}).values())

  def occupancy(self, room_name: str) -> int:
    return len(self.rooms.get(room_name, {}))

  def broadcast(self, room_name: str, event: str, data: Any, exclude: Optional[Connection] = None) -> int:
    """
    Queue an event for every open member of a room, skipping `exclude`.
    Returns how many members it was queued for.
    """
    message = envelope(event, data)
    delivered = 0
    for connection in self.members(room_name):
      if connection is exclude:
        continue
      if connection.send(message):
        delivered += 1
    return delivered

  def announce_role(self, connection: Connection, role: Any, room_name: Optional[str] = None):
    if not connection.connected:
      logger.warning(f"Ignoring role announcement from closed connection {connection.id}")
      return

    room_name = room_name or connection.room or self.default_room
    if connection.room and connection.room != room_name:
      self._leave(connection)

    connection.role = role
    self.rooms.setdefault(room_name, {})[connection.id] = connection
    connection.room = room_name

    count = self.occupancy(room_name)
    logger.info(f"Connection {connection.id} announced role {role!r} in room '{room_name}'. Room has {count} members")
    self.broadcast(room_name, PRESENCE_EVENT, PresenceEvent(role=role, count=count).model_dump())

  def remove(self, connection: Connection):
    """
    Drop a closed connection and tell the rest of its room who left.
    """
    if connection.id not in self.connections:
      return

    room_name = connection.room or self.default_room
    self._leave(connection)
    self.connections.pop(connection.id, None)
    connection.close()

    role = connection.role if connection.role is not None else UNKNOWN_ROLE
    logger.info(f"Connection {connection.id} ({role!r}) left room '{room_name}'. Room has {self.occupancy(room_name)} members")
    self.broadcast(room_name, PEER_DISCONNECTED_EVENT, PeerDisconnectedEvent(role=role).model_dump())

  def _leave(self, connection: Connection):
    members = self.rooms.get(connection.room)
    if members is not None:
      members.pop(connection.id, None)
      if not members and connection.room != self.default_room:
        del self.rooms[connection.room]
    connection.room = None

room_manager = RoomManager()
