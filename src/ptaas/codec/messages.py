"""
Client -> server websocket messages.

The wire form is an object keyed by variant name::

    {"Subscribe": {"project_id": "p1"}}
    {"Unsubscribe": {"project_id": "p1"}}

``decode_client_message`` mirrors the keys present, so both or neither
field of ``WSFromClient`` may be set. ``as_message`` is the one place that
turns that into a single variant.
"""

import logging
from typing import Any, Union

from ptaas.codec.wire import decode_model, dumps, encode_model, loads
from ptaas.errors import EmptyEnvelope
from ptaas.models.messages import (
    ClientMessage,
    Subscribe,
    SubscribeMessage,
    Unrecognized,
    Unsubscribe,
    UnsubscribeMessage,
    WSFromClient,
)

logger = logging.getLogger(__name__)


def decode_client_message(raw: Any) -> WSFromClient:
    return decode_model(WSFromClient, raw)


def as_message(envelope: WSFromClient) -> ClientMessage:
    """Collapse the wire form into one variant.

    Subscribe wins when both keys are set; the unsubscribe is logged and
    dropped. Neither key set gives ``Unrecognized``, never a default variant.
    """
    if envelope.subscribe is not None:
        if envelope.unsubscribe is not None:
            logger.warning(
                "Message carries both Subscribe and Unsubscribe, ignoring Unsubscribe(%s)",
                envelope.unsubscribe.project_id,
            )
        return Subscribe(project_id=envelope.subscribe.project_id)
    if envelope.unsubscribe is not None:
        return Unsubscribe(project_id=envelope.unsubscribe.project_id)
    return Unrecognized()


def parse_client_message(raw: Any, *, require_known: bool = False) -> ClientMessage:
    message = as_message(decode_client_message(raw))
    if require_known and isinstance(message, Unrecognized):
        raise EmptyEnvelope("WSFromClient")
    return message


def to_wire(message: ClientMessage) -> WSFromClient:
    if isinstance(message, Subscribe):
        return WSFromClient(Subscribe=SubscribeMessage(project_id=message.project_id))
    if isinstance(message, Unsubscribe):
        return WSFromClient(Unsubscribe=UnsubscribeMessage(project_id=message.project_id))
    return WSFromClient()


def encode_client_message(message: Union[ClientMessage, WSFromClient]) -> dict[str, Any]:
    envelope = message if isinstance(message, WSFromClient) else to_wire(message)
    return encode_model(envelope)


def loads_client_message(text: Union[str, bytes], *, require_known: bool = False) -> ClientMessage:
    return parse_client_message(loads(text), require_known=require_known)


def dumps_client_message(message: Union[ClientMessage, WSFromClient]) -> str:
    return dumps(encode_client_message(message))
