"""Client websocket messages: Subscribe / Unsubscribe."""

import logging

import pytest

from ptaas.codec.messages import (
    as_message,
    decode_client_message,
    dumps_client_message,
    encode_client_message,
    loads_client_message,
    parse_client_message,
)
from ptaas.errors import EmptyEnvelope, MalformedInput, TypeMismatch
from ptaas.models.messages import SubscribeMessage, Subscribe, Unrecognized, Unsubscribe, UnsubscribeMessage, WSFromClient


def test_subscribe():
    envelope = decode_client_message({"Subscribe": {"project_id": "p1"}})
    assert envelope.subscribe == SubscribeMessage(project_id="p1")
    assert envelope.unsubscribe is None
    assert as_message(envelope) == Subscribe(project_id="p1")


@pytest.mark.parametrize("key", ["subscribe", "unsubscribe"])
def test_field_names_are_not_wire_keys(key):
    envelope = decode_client_message({key: {"project_id": "p1"}})
    assert envelope.subscribe is None
    assert envelope.unsubscribe is None
    assert parse_client_message({key: {"project_id": "p1"}}) == Unrecognized()


def test_unsubscribe():
    assert parse_client_message({"Unsubscribe": {"project_id": "p2"}}) == Unsubscribe(project_id="p2")


def test_project_id_is_optional():
    assert parse_client_message({"Subscribe": {}}) == Subscribe()


def test_no_known_key_is_unrecognized():
    envelope = decode_client_message({})
    assert envelope.subscribe is None
    assert envelope.unsubscribe is None
    assert as_message(envelope) == Unrecognized()
    assert parse_client_message({"Ping": {}}) == Unrecognized()


def test_unrecognized_can_be_rejected():
    with pytest.raises(EmptyEnvelope):
        parse_client_message({}, require_known=True)


def test_both_keys_populate_both_fields(caplog):
    raw = {"Subscribe": {"project_id": "p1"}, "Unsubscribe": {"project_id": "p2"}}
    envelope = decode_client_message(raw)
    assert envelope.subscribe.project_id == "p1"
    assert envelope.unsubscribe.project_id == "p2"
    with caplog.at_level(logging.WARNING, logger="ptaas.codec.messages"):
        assert as_message(envelope) == Subscribe(project_id="p1")
    assert "ignoring Unsubscribe" in caplog.text


@pytest.mark.parametrize("raw, field, kind", [
    ({"Subscribe": "p1"}, "Subscribe", "an object"),
    ({"Unsubscribe": {"project_id": 7}}, "Unsubscribe.project_id", "a string"),
    (["Subscribe"], "", "an object"),
])
def test_shape_errors(raw, field, kind):
    with pytest.raises(TypeMismatch) as exc_info:
        decode_client_message(raw)
    assert exc_info.value.field == field
    assert exc_info.value.expected_kind == kind


def test_encode():
    assert encode_client_message(Subscribe(project_id="project1")) == {"Subscribe": {"project_id": "project1"}}
    assert encode_client_message(Unsubscribe()) == {"Unsubscribe": {}}
    assert encode_client_message(Unrecognized()) == {}


def test_encode_wire_form_keeps_both_fields():
    envelope = WSFromClient(Subscribe=SubscribeMessage(project_id="a"), Unsubscribe=UnsubscribeMessage(project_id="b"))
    assert encode_client_message(envelope) == {"Subscribe": {"project_id": "a"}, "Unsubscribe": {"project_id": "b"}}


def test_text_round_trip():
    for message in (Subscribe(project_id="p1"), Unsubscribe(project_id="p1"), Unrecognized()):
        assert loads_client_message(dumps_client_message(message)) == message


def test_malformed_text():
    with pytest.raises(MalformedInput):
        loads_client_message('{"Subscribe": ')
