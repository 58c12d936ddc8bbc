"""
Nested-variant envelope: wire adapter and resolver.

Wire shape (every level is a ``processed``/``failed`` pair)::

    {"processed": {"allProjects": {"processed": {"projects": [...]}}}}
    {"processed": {"allProjects": {"failed": {"aProjectIsMissing": {"message": "..."}}}}}
    {"failed": {"missingToken": {"message": "...", "reason": "permissions"}}}

The root carries no tag; the caller knows which request it is reading the
reply to. Nothing on the wire forbids populating several fields of one
level, so precedence is fixed here:

- ``processed`` before ``failed``;
- inside ``processed``, branches in ``VariantSchema`` declaration order;
- inside ``failed``, labels in enum declaration order.

Populated fields that lose are logged at WARNING and dropped. A level with
nothing populated raises ``EmptyEnvelope``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from pydantic import BaseModel

from ptaas.codec.labels import SymbolTable
from ptaas.codec.wire import decode_model, dumps, encode_model, expect_object, loads
from ptaas.errors import EmptyEnvelope, UnencodablePayload, UnknownSymbol
from ptaas.models.entities import AllProjectsResponseData, AllScriptsResponseData, APIError
from ptaas.models.failures import AllProjectsResponseErrorType, AllScriptsResponseErrorType, TransportFailure
from ptaas.models.variants import Branch, Failed, Processed, Resolution, VariantResponse

logger = logging.getLogger(__name__)

PROCESSED = "processed"
FAILED = "failed"


@dataclass(frozen=True)
class BranchSpec:
    """A named sub-envelope of ``processed``: its payload and failure symbols."""
    name: str
    payload_model: type[BaseModel]
    failures: SymbolTable


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _split(raw: Any, path: str) -> tuple[str, Any]:
    """Pick the populated arm of a ``processed``/``failed`` pair."""
    obj = expect_object(raw, path)
    processed, failed = obj.get(PROCESSED), obj.get(FAILED)
    if processed is not None:
        if failed is not None:
            logger.warning("Both arms populated at %s, ignoring 'failed'", path or "<root>")
        return PROCESSED, processed
    if failed is not None:
        return FAILED, failed
    raise EmptyEnvelope(path)


def _decode_failure(raw: Any, table: SymbolTable, path: str) -> Failed:
    # serde writes data-less variants as the bare label
    if isinstance(raw, str):
        return Failed(reason=table.symbol_of(raw, path))

    obj = expect_object(raw, path)
    populated = [key for key, value in obj.items() if value is not None]
    known = [label for label in table.labels() if obj.get(label) is not None]
    if not known:
        if populated:
            raise UnknownSymbol(table.name, populated[0])
        raise EmptyEnvelope(path)

    label = known[0]
    dropped = [key for key in populated if key != label]
    if dropped:
        logger.warning("Several failures populated at %s, using %r and ignoring %s", path, label, dropped)

    detail_path = _join(path, label)
    detail_raw = expect_object(obj[label], detail_path)
    detail = decode_model(APIError, detail_raw, detail_path) if detail_raw else None
    return Failed(reason=table.symbol_of(label), detail=detail)


def _encode_failure(failed: Failed, table: SymbolTable) -> dict[str, Any]:
    detail = encode_model(failed.detail) if failed.detail is not None else {}
    return {table.label_of(failed.reason): detail}


class VariantSchema:
    """Which named branches a processed response may hold, and its top-level failures."""

    def __init__(self, branches: Sequence[BranchSpec], transport: SymbolTable, name: str = "APIResponse"):
        self.branches = tuple(branches)
        self.transport = transport
        self.name = name
        self._by_name = {spec.name: spec for spec in self.branches}
        if len(self._by_name) != len(self.branches):
            raise ValueError(f"{name}: duplicate branch names")

    def branch(self, name: str) -> BranchSpec:
        try:
            return self._by_name[name]
        except KeyError:
            raise ValueError(f"{self.name} has no branch {name!r}") from None

    # decoding

    def decode(self, raw: Any) -> VariantResponse:
        arm, value = _split(raw, "")
        if arm == PROCESSED:
            return Processed(value=self._decode_branch(value))
        return _decode_failure(value, self.transport, FAILED)

    def _decode_branch(self, raw: Any) -> Branch:
        obj = expect_object(raw, PROCESSED)
        populated = [spec for spec in self.branches if obj.get(spec.name) is not None]
        if not populated:
            unknown = [key for key, value in obj.items() if value is not None]
            if unknown:
                raise UnknownSymbol(f"{self.name} branch", unknown[0])
            raise EmptyEnvelope(PROCESSED)

        spec = populated[0]
        if len(populated) > 1:
            logger.warning(
                "Several branches populated under %r, using %r and ignoring %s",
                PROCESSED, spec.name, [s.name for s in populated[1:]],
            )

        path = _join(PROCESSED, spec.name)
        arm, value = _split(obj[spec.name], path)
        if arm == PROCESSED:
            outcome: Union[Processed, Failed] = Processed(
                value=decode_model(spec.payload_model, value, _join(path, PROCESSED))
            )
        else:
            outcome = _decode_failure(value, spec.failures, _join(path, FAILED))
        return Branch(name=spec.name, outcome=outcome)

    def resolve(self, raw: Any) -> Resolution:
        """Decode ``raw`` and walk it down to its leaf."""
        return self.resolution(self.decode(raw))

    def resolution(self, response: VariantResponse) -> Resolution:
        if isinstance(response, Failed):
            return Resolution((self.transport.label_of(response.reason),), response)
        branch: Branch = response.value
        outcome = branch.outcome
        if isinstance(outcome, Failed):
            label = self.branch(branch.name).failures.label_of(outcome.reason)
            return Resolution((branch.name, label), outcome)
        return Resolution((branch.name,), outcome)

    # encoding

    def encode(self, response: VariantResponse) -> dict[str, Any]:
        if isinstance(response, Failed):
            return {FAILED: _encode_failure(response, self.transport)}

        branch: Branch = response.value
        spec = self.branch(branch.name)
        outcome = branch.outcome
        if isinstance(outcome, Failed):
            inner = {FAILED: _encode_failure(outcome, spec.failures)}
        else:
            if not isinstance(outcome.value, spec.payload_model):
                raise UnencodablePayload(
                    f"{branch.name} expects {spec.payload_model.__name__}, got {type(outcome.value).__name__}"
                )
            inner = {PROCESSED: encode_model(outcome.value)}
        return {PROCESSED: {branch.name: inner}}

    def loads(self, text: Union[str, bytes]) -> VariantResponse:
        return self.decode(loads(text))

    def dumps(self, response: VariantResponse, indent: Optional[int] = None) -> str:
        return dumps(self.encode(response), indent=indent)


DEFAULT_SCHEMA = VariantSchema(
    branches=[
        BranchSpec("allProjects", AllProjectsResponseData, SymbolTable(AllProjectsResponseErrorType)),
        BranchSpec("allScripts", AllScriptsResponseData, SymbolTable(AllScriptsResponseErrorType)),
    ],
    transport=SymbolTable(TransportFailure),
)


def processed(name: str, value: Any) -> Processed:
    """Build a processed response holding ``value`` under branch ``name``."""
    return Processed(value=Branch(name=name, outcome=Processed(value=value)))


def branch_failed(name: str, reason: Any, detail: Optional[APIError] = None) -> Processed:
    """Build a processed response whose branch ``name`` failed with ``reason``."""
    return Processed(value=Branch(name=name, outcome=Failed(reason=reason, detail=detail)))


def transport_failed(reason: TransportFailure, detail: Optional[APIError] = None) -> Failed:
    return Failed(reason=reason, detail=detail)
