"""
Generic response envelope.

``success`` says how to read the rest; the shape itself does not stop a
failed response from carrying data, or a successful one from carrying an
error, so consumers check ``success`` first.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from ptaas.models.failures import APIResponseType

D = TypeVar("D")
E = TypeVar("E")


class APIResponseError(BaseModel, Generic[E]):
    model_config = {"frozen": True}

    error_type: E
    error_message: str


class APIResponse(BaseModel, Generic[D, E]):
    model_config = {"frozen": True}

    success: bool
    response_type: APIResponseType
    data: Optional[D] = None
    error: Optional[APIResponseError[E]] = None

    @property
    def is_ok(self) -> bool:
        return self.success and self.error is None

    def unwrap(self) -> Any:
        """Return ``data`` of a successful response, or raise ``ValueError``."""
        if not self.success:
            message = self.error.error_message if self.error else "no error detail"
            raise ValueError(f"{self.response_type.value} failed: {message}")
        return self.data

    def failure(self) -> Optional[APIResponseError[E]]:
        """The error of a failed response; None whenever ``success`` is set."""
        return None if self.success else self.error
