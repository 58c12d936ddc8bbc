"""
Example payloads of every envelope shape, as the server emits them.
"""

from typing import Any

from ptaas.codec.dialects import CAMEL, Dialect
from ptaas.codec.envelope import all_projects_codec, general_codec
from ptaas.codec.messages import encode_client_message
from ptaas.codec.variants import DEFAULT_SCHEMA, branch_failed, processed, transport_failed
from ptaas.models.entities import AllProjectsResponseData, AllScriptsResponseData, APIError, Project, Script
from ptaas.models.envelope import APIResponse, APIResponseError
from ptaas.models.failures import (
    AllProjectsResponseErrorType,
    AllScriptsResponseErrorType,
    APIGeneralResponseErrorType,
    APIResponseType,
    TransportFailure,
)
from ptaas.models.messages import Subscribe, Unsubscribe

PROJECTS = AllProjectsResponseData(projects=[
    Project(id="project1", installed=True, scripts=[Script(id="script1"), Script(id="script2")]),
    Project(id="project2", installed=False, scripts=[Script(id="script3")]),
])


def envelope_samples(dialect: Dialect = CAMEL) -> dict[str, dict[str, Any]]:
    projects = all_projects_codec(dialect)
    general = general_codec(dialect)
    return {
        "all_projects": projects.encode(APIResponse(
            success=True,
            response_type=APIResponseType.ALL_PROJECTS_RESPONSE,
            data=PROJECTS,
        )),
        "all_projects_failed": projects.encode(APIResponse(
            success=False,
            response_type=APIResponseType.ALL_PROJECTS_RESPONSE,
            error=APIResponseError(
                error_type=AllProjectsResponseErrorType.CANT_READ_PROJECTS,
                error_message="Failed to read projects.",
            ),
        )),
        "general_failed": general.encode(APIResponse(
            success=False,
            response_type=APIResponseType.GENERAL_RESPONSE,
            error=APIResponseError(
                error_type=APIGeneralResponseErrorType.API_KEY_IS_MISSING,
                error_message="API key is missing.",
            ),
        )),
    }


def variant_samples() -> dict[str, dict[str, Any]]:
    permissions = "permissions"
    return {
        "api_failed": DEFAULT_SCHEMA.encode(transport_failed(
            TransportFailure.MISSING_TOKEN, APIError(message="Token is missing.", reason=permissions),
        )),
        "all_projects": DEFAULT_SCHEMA.encode(processed("allProjects", PROJECTS)),
        "all_projects_failed": DEFAULT_SCHEMA.encode(branch_failed(
            "allProjects", AllProjectsResponseErrorType.A_PROJECT_IS_MISSING,
            APIError(message="We are missing something", reason=permissions),
        )),
        "all_scripts": DEFAULT_SCHEMA.encode(processed(
            "allScripts", AllScriptsResponseData(scripts=[Script(id="script1")]),
        )),
        "all_scripts_failed": DEFAULT_SCHEMA.encode(branch_failed(
            "allScripts", AllScriptsResponseErrorType.A_SCRIPT_IS_MISSING,
            APIError(message="Well that did not work", reason=permissions),
        )),
    }


def message_samples() -> dict[str, dict[str, Any]]:
    return {
        "subscribe": encode_client_message(Subscribe(project_id="project1")),
        "unsubscribe": encode_client_message(Unsubscribe(project_id="project1")),
    }
