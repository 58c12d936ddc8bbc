"""
Client -> server websocket messages.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, StrictStr


class SubscribeMessage(BaseModel):
    model_config = {"frozen": True}

    project_id: Optional[StrictStr] = None


class UnsubscribeMessage(BaseModel):
    model_config = {"frozen": True}

    project_id: Optional[StrictStr] = None


class WSFromClient(BaseModel):
    """Wire form: the variant is the key that is present. Both or neither may be."""
    model_config = {"frozen": True}

    subscribe: Optional[SubscribeMessage] = Field(default=None, alias="Subscribe")
    unsubscribe: Optional[UnsubscribeMessage] = Field(default=None, alias="Unsubscribe")


class Subscribe(BaseModel):
    model_config = {"frozen": True}

    project_id: Optional[str] = None


class Unsubscribe(BaseModel):
    model_config = {"frozen": True}

    project_id: Optional[str] = None


class Unrecognized(BaseModel):
    """Neither known key was present. Not a default subscribe or unsubscribe."""
    model_config = {"frozen": True}


ClientMessage = Union[Subscribe, Unsubscribe, Unrecognized]
