from pydantic import ValidationError
from typing import Any
from schemas.signaling.signaling_schema import (
  SIGNAL_EVENTS,
  RoleAnnouncement,
  SignalKind,
  inbound_message_adapter,
)
from .room_manager import Connection, RoomManager, room_manager
import logging

logger = logging.getLogger(__name__)

class SignalingRelay:
  def __init__(self, manager: RoomManager):
    self.room_manager = manager

  def relay(self, kind: SignalKind, sender: Connection, payload: Any) -> int:
    """
    Forward `payload` untouched to every other open member of the sender's room.
    Returns the number of recipients; an empty room simply drops the message.
    """
    if not sender.connected:
      return 0

    room_name = sender.room or self.room_manager.default_room
    event = SIGNAL_EVENTS[SignalKind(kind)]
    recipients = self.room_manager.broadcast(room_name, event, payload, exclude=sender)
    logger.debug(f"Relayed {event} from {sender.id} to {recipients} peer(s) in '{room_name}'")
    return recipients

  def handle_message(self, connection: Connection, raw: str):
    try:
      message = inbound_message_adapter.validate_json(raw)
    except ValidationError as e:
      logger.warning(f"Ignoring malformed message from {connection.id}: {e.errors(include_url=False)}")
      return

    if isinstance(message, RoleAnnouncement):
      self.room_manager.announce_role(connection, message.data)
    else:
      self.relay(message.kind, connection, message.data)

signaling_relay = SignalingRelay(room_manager)
