"""
Generic envelope codec.

The envelope knows nothing about its payload or error symbols: callers pass
decoders/encoders for both. ``EnvelopeCodec`` bundles them for the known
endpoints.
"""

import logging
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from pydantic import BaseModel

from ptaas.codec.dialects import CAMEL, Dialect
from ptaas.codec.wire import decode_model, dumps, encode_model, expect_object, loads, located, require
from ptaas.errors import MissingRequiredField, UnknownResponseType, UnknownSymbol
from ptaas.models.entities import AllProjectsResponseData, AllScriptsResponseData
from ptaas.models.envelope import APIResponse, APIResponseError
from ptaas.models.failures import (
    AllProjectsResponseErrorType,
    AllScriptsResponseErrorType,
    APIGeneralResponseErrorType,
    APIResponseType,
)

logger = logging.getLogger(__name__)

D = TypeVar("D")
E = TypeVar("E")


def decode_response(
    raw: Any,
    decode_data: Callable[[Any], D],
    decode_error_type: Callable[[Any], E],
    *,
    dialect: Dialect = CAMEL,
) -> "APIResponse[D, E]":
    """Decode a generic envelope.

    ``decode_data`` only sees a non-null ``data`` value and
    ``decode_error_type`` only sees the nested error type, never the whole
    error object. ``data`` and ``error`` are read independently of
    ``success``: both, either or neither may be present.
    """
    obj = expect_object(raw)
    w = dialect.wire

    success = require(obj, w("success"), bool)
    response_type = _decode_response_type(require(obj, w("response_type"), str), dialect)

    data = None
    if obj.get(w("data")) is not None:
        with located(w("data")):
            data = decode_data(obj[w("data")])

    error = None
    if obj.get(w("error")) is not None:
        error = _decode_error(obj[w("error")], decode_error_type, dialect)

    logger.debug("Decoded %s envelope (success=%s)", response_type.value, success)
    return APIResponse(success=success, response_type=response_type, data=data, error=error)


def _decode_response_type(label: str, dialect: Dialect) -> APIResponseType:
    try:
        return dialect.table(APIResponseType).symbol_of(label)
    except UnknownSymbol:
        raise UnknownResponseType(label) from None


def _decode_error(raw: Any, decode_error_type: Callable[[Any], E], dialect: Dialect) -> APIResponseError:
    w = dialect.wire
    error_field = w("error")
    obj = expect_object(raw, error_field)
    type_field = w("error_type")
    if obj.get(type_field) is None:
        raise MissingRequiredField(f"{error_field}.{type_field}")
    with located(f"{error_field}.{type_field}"):
        error_type = decode_error_type(obj[type_field])
    message = require(obj, w("error_message"), str, error_field)
    return APIResponseError(error_type=error_type, error_message=message)


def encode_response(
    response: "APIResponse[D, E]",
    encode_data: Callable[[D], Any],
    encode_error_type: Callable[[E], Any],
    *,
    dialect: Dialect = CAMEL,
) -> dict[str, Any]:
    """Encode a generic envelope, omitting absent optional fields."""
    w = dialect.wire
    out: dict[str, Any] = {
        w("success"): response.success,
        w("response_type"): dialect.table(APIResponseType).label_of(response.response_type),
    }
    if response.data is not None:
        out[w("data")] = encode_data(response.data)
    if response.error is not None:
        out[w("error")] = {
            w("error_type"): encode_error_type(response.error.error_type),
            w("error_message"): response.error.error_message,
        }
    return out


class EnvelopeCodec(Generic[D, E]):
    """Envelope codec for one endpoint: a payload model and an error enum."""

    def __init__(
        self,
        data_model: Optional[type[BaseModel]],
        error_enum: type,
        dialect: Dialect = CAMEL,
    ):
        self.data_model = data_model
        self.error_table = dialect.table(error_enum)
        self.dialect = dialect

    def _decode_data(self, raw: Any) -> Any:
        if self.data_model is None:
            logger.debug("Ignoring data, %r has no payload model", self)
            return None
        return decode_model(self.data_model, raw)

    def decode(self, raw: Any) -> "APIResponse[D, E]":
        return decode_response(raw, self._decode_data, self.error_table.decoder(), dialect=self.dialect)

    def encode(self, response: "APIResponse[D, E]") -> dict[str, Any]:
        return encode_response(response, encode_model, self.error_table.encoder(), dialect=self.dialect)

    def loads(self, text: Union[str, bytes]) -> "APIResponse[D, E]":
        return self.decode(loads(text))

    def dumps(self, response: "APIResponse[D, E]", indent: Optional[int] = None) -> str:
        return dumps(self.encode(response), indent=indent)

    def __repr__(self) -> str:
        data = self.data_model.__name__ if self.data_model else None
        return f"EnvelopeCodec({data}, {self.error_table.name}, dialect={self.dialect.name!r})"


def all_projects_codec(dialect: Dialect = CAMEL) -> EnvelopeCodec[AllProjectsResponseData, AllProjectsResponseErrorType]:
    return EnvelopeCodec(AllProjectsResponseData, AllProjectsResponseErrorType, dialect)


def all_scripts_codec(dialect: Dialect = CAMEL) -> EnvelopeCodec[AllScriptsResponseData, AllScriptsResponseErrorType]:
    return EnvelopeCodec(AllScriptsResponseData, AllScriptsResponseErrorType, dialect)


def general_codec(dialect: Dialect = CAMEL) -> EnvelopeCodec[None, APIGeneralResponseErrorType]:
    """Codec for general responses.

    General responses never carry a payload, so a ``data`` field is read past
    and the decoded ``data`` is always None. Such a reply does not round-trip.
    """
    return EnvelopeCodec(None, APIGeneralResponseErrorType, dialect)


def decode_reply(raw: Any, codec: EnvelopeCodec) -> APIResponse:
    """Decode a reply to a request that ``codec`` was built for.

    Any request can be answered with a general response (the server rejected
    it before reaching the endpoint). Those are decoded with the general codec
    of the same dialect; everything else with ``codec``.
    """
    obj = expect_object(raw)
    tag = obj.get(codec.dialect.wire("response_type"))
    general = codec.dialect.table(APIResponseType).label_of(APIResponseType.GENERAL_RESPONSE)
    if tag == general and codec.error_table.enum_cls is not APIGeneralResponseErrorType:
        logger.debug("Reply is a general response, decoding with the general codec")
        return general_codec(codec.dialect).decode(obj)
    return codec.decode(obj)
