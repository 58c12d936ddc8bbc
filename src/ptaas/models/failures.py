"""
Failure symbols and response tags.

Member values are the declared symbol names. Wire spellings live in the
symbol tables of ``ptaas.codec.dialects``.
"""

from enum import Enum


class APIResponseType(Enum):
    """Closed tag set of the generic envelope's ``responseType``."""
    GENERAL_RESPONSE = "generalResponse"
    ALL_PROJECTS_RESPONSE = "allProjectsResponse"
    ALL_SCRIPTS_RESPONSE = "allScriptsResponse"


class APIGeneralResponseErrorType(Enum):
    """Failures raised before a request reaches its endpoint."""
    API_KEY_IS_MISSING = "apiKeyIsMissing"
    API_KEY_IS_INVALID = "apiKeyIsInvalid"


class AllProjectsResponseErrorType(Enum):
    CANT_READ_PROJECTS = "cantReadProjects"
    A_PROJECT_IS_MISSING = "aProjectIsMissing"


class AllScriptsResponseErrorType(Enum):
    CANT_READ_SCRIPTS = "cantReadScripts"
    A_SCRIPT_IS_MISSING = "aScriptIsMissing"
    CORRESPONDING_PROJECT_IS_MISSING = "correspondingProjectIsMissing"


class TransportFailure(Enum):
    """Top-level failures of the nested-variant envelope."""
    MISSING_TOKEN = "missingToken"
    EMPTY_TOKEN = "emptyToken"
    NOT_LOGGED_IN = "notLoggedIn"
    INTERNAL_SERVER_ERROR = "internalServerError"
