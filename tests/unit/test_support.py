"""Tests for the exception hierarchy, logging setup and conversion policies."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from easyeda_kicad.config import DEFAULT_POLICY, ArcSnapPolicy, EdgeRoundingPolicy
from easyeda_kicad.exceptions import (
    ArcPathError,
    ArcResolutionError,
    ConversionError,
    GeometryError,
    LayerResolutionError,
    SexpDecodeError,
    ShapeRecordError,
    UnsupportedShapeError,
)
from easyeda_kicad.logging_config import (
    ConversionLoggerAdapter,
    conversion_scope,
    create_logger,
    get_conversion_id,
    setup_logging,
)


class TestExceptions:
    def test_base_to_dict(self) -> None:
        err = ConversionError("boom", shape_id="gge1")
        assert err.to_dict() == {
            "error": True,
            "error_type": "ConversionError",
            "error_code": "ConversionError",
            "message": "boom",
            "shape_id": "gge1",
        }

    def test_arc_path_error(self) -> None:
        err = ArcPathError("bad path", path="M 1")
        assert isinstance(err, GeometryError)
        assert err.error_code == "ARC_PATH_ERROR"
        assert err.to_dict()["path"] == "M 1"

    @pytest.mark.parametrize(
        "error,code",
        [
            (ArcResolutionError("x"), "ARC_RESOLUTION_ERROR"),
            (LayerResolutionError("x", layer_id="99"), "LAYER_RESOLUTION_ERROR"),
            (UnsupportedShapeError("x", shape_type="PAD"), "UNSUPPORTED_SHAPE"),
            (ShapeRecordError("x", shape_type="TRACK"), "SHAPE_RECORD_ERROR"),
            (SexpDecodeError("x", position=4), "SEXP_DECODE_ERROR"),
        ],
    )
    def test_error_codes(self, error: ConversionError, code: str) -> None:
        assert isinstance(error, ConversionError)
        assert error.error_code == code
        assert str(error) == "x"

    def test_decode_error_is_value_error(self) -> None:
        assert isinstance(SexpDecodeError("x"), ValueError)


class TestConversionScope:
    def test_scope_sets_and_resets_id(self) -> None:
        assert get_conversion_id() is None
        with conversion_scope("board-1") as conversion_id:
            assert conversion_id == "board-1"
            assert get_conversion_id() == "board-1"
            with conversion_scope("fp-2"):
                assert get_conversion_id() == "fp-2"
            assert get_conversion_id() == "board-1"
        assert get_conversion_id() is None

    def test_adapter_injects_id(self) -> None:
        adapter = create_logger("easyeda_kicad.test")
        assert isinstance(adapter, ConversionLoggerAdapter)
        with conversion_scope("board-1"):
            _, kwargs = adapter.process("msg", {})
        assert kwargs["extra"] == {"conversion_id": "board-1"}

    def test_explicit_id_kept(self) -> None:
        adapter = create_logger("easyeda_kicad.test")
        with conversion_scope("board-1"):
            _, kwargs = adapter.process("msg", {"extra": {"conversion_id": "fp-3"}})
        assert kwargs["extra"] == {"conversion_id": "fp-3"}

    def test_adapter_without_scope(self) -> None:
        _, kwargs = create_logger("easyeda_kicad.test").process("msg", {})
        assert kwargs["extra"] == {}


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _isolated_root(self, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        level = root.level
        yield
        root.setLevel(level)

    def test_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGGING_LEVEL", "DEBUG")
        root = setup_logging()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_explicit_level(self) -> None:
        root = setup_logging("ERROR")
        assert root.level == logging.ERROR

    def test_records_carry_conversion_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("INFO", "%(conversion_id)s %(message)s")
        logger = create_logger("easyeda_kicad.test")
        with conversion_scope("board-7"):
            logger.info("converted")
        logger.info("outside")
        out = capsys.readouterr().out
        assert "board-7 converted" in out
        assert "- outside" in out


class TestPolicies:
    def test_default_policy(self) -> None:
        assert DEFAULT_POLICY.arc_snap.applies_to("Edge.Cuts")
        assert DEFAULT_POLICY.edge_rounding.applies_to("Edge.Cuts")
        assert not DEFAULT_POLICY.edge_rounding.applies_to("F.Cu")

    def test_snap_window_is_exclusive(self) -> None:
        policy = ArcSnapPolicy()
        assert policy.snap(89.0) == 89.0
        assert policy.snap(89.01) == 90.0
        assert policy.snap(44.5) == 45.0
        assert policy.snap(120.0) == 120.0

    def test_disabled_rounding(self) -> None:
        assert not EdgeRoundingPolicy(enabled=False).applies_to("Edge.Cuts")
