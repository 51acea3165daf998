from fastapi import APIRouter, WebSocket
from helpers.utils.room_manager import room_manager
from helpers.utils.signaling_relay import signaling_relay
import asyncio
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.websocket("/ws")
async def signaling_endpoint(websocket: WebSocket):
  await websocket.accept()

  connection = room_manager.connect(websocket)
  writer = asyncio.create_task(connection.pump())

  try:
    while True:
      message = await websocket.receive()
      if message["type"] == "websocket.disconnect":
        break

      text = message.get("text")
      if text is None:
        logger.warning(f"Ignoring non-text frame from {connection.id}")
        continue

      signaling_relay.handle_message(connection, text)
  except Exception as e:
    logger.error(f"Unexpected error on connection {connection.id}: {e}")
    await websocket.close(code=1011, reason=str(e))
  finally:
    # Disconnect always fires, whatever state the connection reached
    room_manager.remove(connection)
    writer.cancel()
