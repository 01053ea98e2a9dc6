"""Tests for config models — defaults and sparse overrides."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from bookctl.config.models import BuildConfig, GraphvizConfig, LatexConfig


class TestLatexConfig:
    def test_defaults(self) -> None:
        cfg = LatexConfig()
        assert cfg.builder == "pdflatex"
        assert cfg.directory == Path("src/book/latex")

    def test_frozen(self) -> None:
        cfg = LatexConfig()
        with pytest.raises(ValidationError):
            cfg.builder = "xelatex"  # type: ignore[misc]


class TestGraphvizConfig:
    def test_defaults(self) -> None:
        assert GraphvizConfig().directory == Path("src/book/graphviz")


class TestBuildConfig:
    def test_defaults(self) -> None:
        cfg = BuildConfig()
        assert cfg.target_directory == Path("target/book")
        assert cfg.images_directory == Path("src/book/images")
        assert cfg.source_root == Path("src")
        assert cfg.substitutes == {}

    def test_sparse_override(self) -> None:
        cfg = BuildConfig.model_validate({"target_directory": "out", "substitutes": {"A": "b"}})
        assert cfg.target_directory == Path("out")
        assert cfg.source_root == Path("src")
        assert cfg.substitutes == {"A": "b"}

    def test_substitutes_keep_order(self) -> None:
        cfg = BuildConfig(substitutes={"z": "1", "a": "2"})
        assert list(cfg.substitutes) == ["z", "a"]
