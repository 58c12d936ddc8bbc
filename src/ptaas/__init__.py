"""
ptaas-client: typed envelopes for the PTaaS API and websocket messages.

Decode and encode server replies (generic and nested-variant envelopes) and
client websocket messages, with typed errors for every malformed payload.
"""

from ptaas.codec.dialects import CAMEL, SNAKE, Dialect, get_dialect
from ptaas.codec.envelope import (
    EnvelopeCodec,
    all_projects_codec,
    all_scripts_codec,
    decode_reply,
    decode_response,
    encode_response,
    general_codec,
)
from ptaas.codec.labels import SymbolTable
from ptaas.codec.messages import as_message, decode_client_message, encode_client_message, parse_client_message
from ptaas.codec.variants import DEFAULT_SCHEMA, BranchSpec, VariantSchema
from ptaas.codec.wire import FieldNaming
from ptaas.errors import (
    DecodeError,
    EmptyEnvelope,
    MalformedInput,
    MissingRequiredField,
    PtaasError,
    TypeMismatch,
    UnencodablePayload,
    UnknownResponseType,
    UnknownSymbol,
    is_forward_compatible,
)
from ptaas.models.entities import AllProjectsResponseData, AllScriptsResponseData, APIError, Project, Script
from ptaas.models.envelope import APIResponse, APIResponseError

__version__ = "0.1.0"
__all__ = [
    "CAMEL",
    "SNAKE",
    "Dialect",
    "get_dialect",
    "EnvelopeCodec",
    "all_projects_codec",
    "all_scripts_codec",
    "general_codec",
    "decode_reply",
    "decode_response",
    "encode_response",
    "SymbolTable",
    "FieldNaming",
    "DEFAULT_SCHEMA",
    "BranchSpec",
    "VariantSchema",
    "as_message",
    "decode_client_message",
    "encode_client_message",
    "parse_client_message",
    "PtaasError",
    "DecodeError",
    "MalformedInput",
    "TypeMismatch",
    "MissingRequiredField",
    "UnknownResponseType",
    "UnknownSymbol",
    "EmptyEnvelope",
    "UnencodablePayload",
    "is_forward_compatible",
    "Script",
    "Project",
    "APIError",
    "AllProjectsResponseData",
    "AllScriptsResponseData",
    "APIResponse",
    "APIResponseError",
]
