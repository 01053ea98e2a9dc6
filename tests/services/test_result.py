"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from bookctl.domain.errors import SectionNotFoundError, ToolInvocationError
from bookctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="build", data={"needs_rebuild": False})
        assert result.ok is True
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="build", data={"target": "/t"}, meta={"x": 1})
        parsed = json.loads(result.model_dump_json())
        assert parsed["op"] == "build"
        assert parsed["data"]["target"] == "/t"
        assert parsed["meta"]["x"] == 1

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="build")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceErrorFromException:
    def test_section_not_found(self) -> None:
        error = ServiceError.from_exception(SectionNotFoundError("main:A.scala", "imports"))
        assert error.code == "SECTION_NOT_FOUND"
        assert error.message == "Section imports not found in main:A.scala"
        assert error.detail == {"file": "main:A.scala", "section": "imports"}

    def test_tool_failure(self) -> None:
        exc = ToolInvocationError(
            "Error building PDF file book.latex",
            source="book.latex",
            command=["pdflatex", "book.tmp.latex"],
            returncode=1,
            output="! Undefined control sequence.",
        )
        error = ServiceError.from_exception(exc)
        assert error.code == "TOOL_FAILED"
        assert error.detail["command"] == ["pdflatex", "book.tmp.latex"]
        assert error.detail["returncode"] == 1
