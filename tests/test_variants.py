"""Nested-variant envelope: resolution and encoding."""

import logging

import pytest

from ptaas.codec.labels import SymbolTable
from ptaas.codec.variants import (
    DEFAULT_SCHEMA,
    BranchSpec,
    VariantSchema,
    branch_failed,
    processed,
    transport_failed,
)
from ptaas.errors import EmptyEnvelope, MissingRequiredField, TypeMismatch, UnencodablePayload, UnknownSymbol
from ptaas.models.entities import AllProjectsResponseData, AllScriptsResponseData, APIError, Project, Script
from ptaas.models.failures import AllProjectsResponseErrorType, AllScriptsResponseErrorType, TransportFailure
from ptaas.models.variants import Branch, Failed, Processed
from ptaas.samples import variant_samples

PROJECT_MISSING = {
    "processed": {
        "allProjects": {"processed": None, "failed": {"cantReadProjects": None, "aProjectIsMissing": {"message": "gone"}}},
        "allScripts": None,
    },
    "failed": None,
}


class TestResolve:
    def test_branch_failure_resolves_deterministically(self):
        first = DEFAULT_SCHEMA.resolve(PROJECT_MISSING)
        for _ in range(5):
            assert DEFAULT_SCHEMA.resolve(PROJECT_MISSING) == first
        assert first.path == ("allProjects", "aProjectIsMissing")
        assert first.failed
        assert first.outcome == Failed(
            reason=AllProjectsResponseErrorType.A_PROJECT_IS_MISSING,
            detail=APIError(message="gone"),
        )

    def test_processed_branch(self):
        raw = {"processed": {"allScripts": {"processed": {"scripts": [{"id": "s2"}, {"id": "s1"}]}}}}
        resolution = DEFAULT_SCHEMA.resolve(raw)
        assert resolution.path == ("allScripts",)
        assert not resolution.failed
        assert resolution.value == AllScriptsResponseData(scripts=[Script(id="s2"), Script(id="s1")])

    def test_transport_failure(self):
        raw = {"failed": {"missingToken": {"message": "where is the token?", "reason": "permissions"}}}
        resolution = DEFAULT_SCHEMA.resolve(raw)
        assert resolution.path == ("missingToken",)
        assert resolution.outcome.reason is TransportFailure.MISSING_TOKEN
        assert resolution.value == APIError(message="where is the token?", reason="permissions")

    def test_failure_without_detail(self):
        resolution = DEFAULT_SCHEMA.resolve({"failed": {"notLoggedIn": {}}})
        assert resolution.outcome == Failed(reason=TransportFailure.NOT_LOGGED_IN)
        assert resolution.value is None

    def test_bare_label_failure(self):
        raw = {"processed": {"allScripts": {"failed": "correspondingProjectIsMissing"}}}
        resolution = DEFAULT_SCHEMA.resolve(raw)
        assert resolution.path == ("allScripts", "correspondingProjectIsMissing")
        assert resolution.outcome.detail is None


class TestPrecedence:
    def test_first_declared_branch_wins(self, caplog):
        raw = {
            "processed": {
                "allScripts": {"processed": {"scripts": []}},
                "allProjects": {"processed": {"projects": []}},
            }
        }
        with caplog.at_level(logging.WARNING, logger="ptaas.codec.variants"):
            resolution = DEFAULT_SCHEMA.resolve(raw)
        assert resolution.path == ("allProjects",)
        assert "allScripts" in caplog.text

    def test_processed_wins_over_failed(self, caplog):
        raw = {"processed": {"allProjects": {"processed": {"projects": []}}}, "failed": {"emptyToken": {}}}
        with caplog.at_level(logging.WARNING, logger="ptaas.codec.variants"):
            resolution = DEFAULT_SCHEMA.resolve(raw)
        assert resolution.path == ("allProjects",)
        assert "ignoring 'failed'" in caplog.text

    def test_first_declared_failure_wins(self):
        raw = {"failed": {"internalServerError": {"message": "boom"}, "emptyToken": {"message": "empty"}}}
        resolution = DEFAULT_SCHEMA.resolve(raw)
        assert resolution.path == ("emptyToken",)

    def test_known_failure_wins_over_unknown(self):
        raw = {"failed": {"tokenExpired": {"message": "late"}, "missingToken": {"message": "m"}}}
        assert DEFAULT_SCHEMA.resolve(raw).path == ("missingToken",)


class TestDecodeErrors:
    @pytest.mark.parametrize("raw, path", [
        ({}, ""),
        ({"processed": None, "failed": None}, ""),
        ({"processed": {}}, "processed"),
        ({"processed": {"allProjects": {}}}, "processed.allProjects"),
        ({"processed": {"allProjects": {"failed": {}}}}, "processed.allProjects.failed"),
        ({"failed": {"missingToken": None}}, "failed"),
    ])
    def test_empty_envelope(self, raw, path):
        with pytest.raises(EmptyEnvelope) as exc_info:
            DEFAULT_SCHEMA.decode(raw)
        assert exc_info.value.path == path

    def test_unknown_failure_label(self):
        with pytest.raises(UnknownSymbol) as exc_info:
            DEFAULT_SCHEMA.decode({"failed": {"tokenExpired": {"message": "late"}}})
        assert exc_info.value.enum_name == "TransportFailure"
        assert exc_info.value.label == "tokenExpired"

    def test_unknown_bare_label(self):
        with pytest.raises(UnknownSymbol) as exc_info:
            DEFAULT_SCHEMA.decode({"processed": {"allProjects": {"failed": "projectOnFire"}}})
        assert exc_info.value.enum_name == "AllProjectsResponseErrorType"

    def test_unknown_branch(self):
        with pytest.raises(UnknownSymbol) as exc_info:
            DEFAULT_SCHEMA.decode({"processed": {"allTests": {"processed": {}}}})
        assert exc_info.value.label == "allTests"

    @pytest.mark.parametrize("branch, payload, path", [
        ("allProjects", {}, "projects"),
        ("allProjects", {"projects": None}, "projects"),
        ("allProjects", {"projects": [{"installed": True, "scripts": []}]}, "projects.0.id"),
        ("allProjects", {"projects": [{"id": "p", "scripts": []}]}, "projects.0.installed"),
        ("allProjects", {"projects": [{"id": "p", "installed": None, "scripts": []}]}, "projects.0.installed"),
        ("allProjects", {"projects": [{"id": "p", "installed": True}]}, "projects.0.scripts"),
        ("allProjects", {"projects": [{"id": "p", "installed": True, "scripts": [{}]}]}, "projects.0.scripts.0.id"),
        ("allScripts", {}, "scripts"),
        ("allScripts", {"scripts": [{"id": None}]}, "scripts.0.id"),
    ])
    def test_missing_payload_field(self, branch, payload, path):
        with pytest.raises(MissingRequiredField) as exc_info:
            DEFAULT_SCHEMA.decode({"processed": {branch: {"processed": payload}}})
        assert exc_info.value.field == f"processed.{branch}.processed.{path}"

    @pytest.mark.parametrize("detail", [{"reason": "r"}, {"message": None}])
    def test_missing_detail_message(self, detail):
        with pytest.raises(MissingRequiredField) as exc_info:
            DEFAULT_SCHEMA.decode({"failed": {"missingToken": detail}})
        assert exc_info.value.field == "failed.missingToken.message"

    def test_payload_type_mismatch_is_located(self):
        with pytest.raises(TypeMismatch) as exc_info:
            DEFAULT_SCHEMA.decode({"processed": {"allProjects": {"processed": {"projects": "nope"}}}})
        assert exc_info.value.field == "processed.allProjects.processed.projects"

    def test_detail_must_be_an_object(self):
        with pytest.raises(TypeMismatch) as exc_info:
            DEFAULT_SCHEMA.decode({"failed": {"missingToken": "no token"}})
        assert exc_info.value.field == "failed.missingToken"

    def test_detail_is_validated(self):
        with pytest.raises(TypeMismatch) as exc_info:
            DEFAULT_SCHEMA.decode({"failed": {"missingToken": {"message": 3}}})
        assert exc_info.value.field == "failed.missingToken.message"


class TestEncode:
    def test_only_the_populated_path_is_written(self):
        response = branch_failed(
            "allProjects", AllProjectsResponseErrorType.CANT_READ_PROJECTS, APIError(message="disk"),
        )
        assert DEFAULT_SCHEMA.encode(response) == {
            "processed": {"allProjects": {"failed": {"cantReadProjects": {"message": "disk"}}}},
        }

    def test_failure_without_detail_encodes_as_empty_object(self):
        assert DEFAULT_SCHEMA.encode(transport_failed(TransportFailure.EMPTY_TOKEN)) == {"failed": {"emptyToken": {}}}

    def test_round_trip(self):
        project = Project(id="p1", installed=True, scripts=[Script(id="s3"), Script(id="s1"), Script(id="s3")])
        response = processed("allProjects", AllProjectsResponseData(projects=[project]))
        assert DEFAULT_SCHEMA.loads(DEFAULT_SCHEMA.dumps(response)) == response

    def test_samples_round_trip(self):
        for payload in variant_samples().values():
            assert DEFAULT_SCHEMA.encode(DEFAULT_SCHEMA.decode(payload)) == payload

    def test_wrong_payload_type(self):
        response = processed("allProjects", AllScriptsResponseData(scripts=[]))
        with pytest.raises(UnencodablePayload):
            DEFAULT_SCHEMA.encode(response)

    def test_unknown_branch_name(self):
        payload = AllScriptsResponseData(scripts=[])
        response = Processed(value=Branch(name="allTests", outcome=Processed(value=payload)))
        with pytest.raises(ValueError, match="no branch"):
            DEFAULT_SCHEMA.encode(response)


class TestSchema:
    def test_custom_schema_order_sets_precedence(self):
        schema = VariantSchema(
            branches=[
                BranchSpec("allScripts", AllScriptsResponseData, SymbolTable(AllScriptsResponseErrorType)),
                BranchSpec("allProjects", AllProjectsResponseData, SymbolTable(AllProjectsResponseErrorType)),
            ],
            transport=SymbolTable(TransportFailure),
        )
        raw = {
            "processed": {
                "allProjects": {"processed": {"projects": []}},
                "allScripts": {"processed": {"scripts": []}},
            }
        }
        assert schema.resolve(raw).path == ("allScripts",)

    def test_duplicate_branch_names(self):
        spec = BranchSpec("allScripts", AllScriptsResponseData, SymbolTable(AllScriptsResponseErrorType))
        with pytest.raises(ValueError, match="duplicate"):
            VariantSchema([spec, spec], SymbolTable(TransportFailure))
