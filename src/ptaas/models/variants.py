"""
Nested-variant envelope as explicit sum types.

On the wire every level is a pair of optional ``processed``/``failed``
fields. Decoding (``ptaas.codec.variants``) turns whichever is populated
into one of the variants below, so the model never holds both.
"""

from typing import Any, Generic, NamedTuple, Optional, TypeVar, Union

from pydantic import BaseModel

from ptaas.models.entities import APIError

T = TypeVar("T")
F = TypeVar("F")


class Processed(BaseModel, Generic[T]):
    model_config = {"frozen": True}

    value: T


class Failed(BaseModel, Generic[F]):
    model_config = {"frozen": True}

    reason: F
    detail: Optional[APIError] = None


class Branch(BaseModel):
    """The populated named sub-envelope of a processed response, e.g. ``allProjects``."""
    model_config = {"frozen": True}

    name: str
    outcome: Union[Processed, Failed]


# Processed[Branch] | Failed[TransportFailure]
VariantResponse = Union[Processed, Failed]


class Resolution(NamedTuple):
    """Terminal state of resolution: wire names walked, and the leaf reached."""
    path: tuple[str, ...]
    outcome: Union[Processed, Failed]

    @property
    def failed(self) -> bool:
        return isinstance(self.outcome, Failed)

    @property
    def value(self) -> Any:
        return self.outcome.value if isinstance(self.outcome, Processed) else self.outcome.detail
