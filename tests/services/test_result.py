"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from crosstrain.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="parse_document", data={"path": "a.md"})
        assert result.ok is True
        assert result.data == {"path": "a.md"}
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        result = ServiceResult(ok=False, op="get", error=ServiceError(code="E001", message="Nope"))
        assert result.error is not None
        assert result.error.code == "E001"
        assert result.error.detail == {}

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("parse_document", "NOT_FOUND", "missing", path="x.md")
        assert result.ok is False
        assert result.op == "parse_document"
        assert result.error == ServiceError(
            code="NOT_FOUND", message="missing", detail={"path": "x.md"}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="test", data={"key": "value"}, warnings=["w"])
        data = json.loads(result.model_dump_json())
        assert data == {
            "ok": True,
            "op": "test",
            "data": {"key": "value"},
            "warnings": ["w"],
            "error": None,
        }

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]
