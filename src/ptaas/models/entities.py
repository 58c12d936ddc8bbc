"""
Domain entities carried as envelope payloads.
"""

from typing import Optional

from pydantic import BaseModel, StrictBool, StrictStr


class Script(BaseModel):
    model_config = {"frozen": True}

    id: StrictStr


class Project(BaseModel):
    """A project and its scripts. Script order is kept; duplicates are legal."""
    model_config = {"frozen": True}

    id: StrictStr
    installed: StrictBool
    scripts: tuple[Script, ...]


class APIError(BaseModel):
    """Detail attached to a leaf failure symbol."""
    model_config = {"frozen": True}

    message: StrictStr
    reason: Optional[StrictStr] = None


class AllProjectsResponseData(BaseModel):
    model_config = {"frozen": True}

    projects: tuple[Project, ...]


class AllScriptsResponseData(BaseModel):
    model_config = {"frozen": True}

    scripts: tuple[Script, ...]
