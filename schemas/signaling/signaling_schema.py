from pydantic import BaseModel, Field, TypeAdapter
from typing import Annotated, Any, Literal, Union
from enum import Enum

class SignalKind(str, Enum):
  OFFER = "offer"
  ANSWER = "answer"
  ICE_CANDIDATE = "ice-candidate"

# Wire event name for each relayed kind, used both inbound and outbound
SIGNAL_EVENTS = {
  SignalKind.OFFER: "webrtc-offer",
  SignalKind.ANSWER: "webrtc-answer",
  SignalKind.ICE_CANDIDATE: "webrtc-ice",
}

PRESENCE_EVENT = "presence"
PEER_DISCONNECTED_EVENT = "peer-disconnected"
UNKNOWN_ROLE = "unknown"

class RoleAnnouncement(BaseModel):
  event: Literal["role"]
  data: Any = None  # free-form role label, not validated

class OfferMessage(BaseModel):
  event: Literal["webrtc-offer"]
  data: Any = None  # opaque SDP blob

  @property
  def kind(self) -> SignalKind:
    return SignalKind.OFFER

class AnswerMessage(BaseModel):
  event: Literal["webrtc-answer"]
  data: Any = None

  @property
  def kind(self) -> SignalKind:
    return SignalKind.ANSWER

class IceCandidateMessage(BaseModel):
  event: Literal["webrtc-ice"]
  data: Any = None

  @property
  def kind(self) -> SignalKind:
    return SignalKind.ICE_CANDIDATE

InboundMessage = Annotated[
  Union[RoleAnnouncement, OfferMessage, AnswerMessage, IceCandidateMessage],
  Field(discriminator="event"),
]

inbound_message_adapter = TypeAdapter(InboundMessage)

class PresenceEvent(BaseModel):
  role: Any
  count: int

class PeerDisconnectedEvent(BaseModel):
  role: Any = UNKNOWN_ROLE

def envelope(event: str, data: Any) -> dict:
  return {"event": event, "data": data}
