"""Tests for the net registry and the layer table."""

from __future__ import annotations

import pytest

from easyeda_kicad.exceptions import LayerResolutionError
from easyeda_kicad.registry import (
    LayerErrorKind,
    LayerTable,
    NetRegistry,
    is_connected,
    is_copper,
)
from easyeda_kicad.sexp import LF, flatten_and_filter


class TestNetRegistry:
    def test_seeded_with_unconnected_net(self) -> None:
        nets = NetRegistry(["GND", "VCC"])
        assert nets.names == ["", "GND", "VCC"]
        assert len(nets) == 3

    def test_duplicates_dropped(self) -> None:
        nets = NetRegistry(["GND", "GND", "", "VCC"])
        assert nets.names == ["", "GND", "VCC"]

    def test_existing_name(self) -> None:
        nets = NetRegistry(["GND"])
        assert nets.get_net_id("GND") == 1
        assert len(nets) == 2

    def test_new_name_appended(self) -> None:
        nets = NetRegistry(["GND"])
        assert nets.get_net_id("VCC") == 2
        assert nets.get_net_id("VCC") == 2
        assert nets.name_of(2) == "VCC"
        assert "VCC" in nets

    @pytest.mark.parametrize("name", ["", None])
    def test_empty_name_is_no_net(self, name: str | None) -> None:
        nets = NetRegistry()
        assert nets.get_net_id(name) is None
        assert len(nets) == 1

    def test_declarations(self) -> None:
        nets = NetRegistry(["GND"])
        assert nets.declarations() == [["net", 0, ""], LF, ["net", 1, "GND"], LF]

    def test_iteration_order(self) -> None:
        nets = NetRegistry(["B", "A"])
        nets.get_net_id("C")
        assert list(nets) == ["", "B", "A", "C"]

    @pytest.mark.parametrize("net_id,expected", [(None, False), (0, False), (1, True)])
    def test_is_connected(self, net_id: int | None, expected: bool) -> None:
        assert is_connected(net_id) is expected


class TestLayerTable:
    @pytest.mark.parametrize(
        "layer_id,name",
        [
            ("1", "F.Cu"),
            ("2", "B.Cu"),
            (3, "F.SilkS"),
            ("10", "Edge.Cuts"),
            ("11", "Edge.Cuts"),
            ("12", "Cmts.User"),
            ("15", "Dwgs.User"),
            ("21", "In1.Cu"),
            ("50", "In30.Cu"),
        ],
    )
    def test_known_layers(self, layer_id: str | int, name: str) -> None:
        result = LayerTable().resolve(layer_id)
        assert result.ok
        assert result.name == name
        assert result.error is None

    def test_inner_layers_raise_max_inner(self) -> None:
        table = LayerTable()
        assert table.resolve("21").name == "In1.Cu"
        assert table.max_inner == 1
        assert table.resolve("41").name == "In21.Cu"
        assert table.max_inner == 21
        table.resolve("22")
        assert table.max_inner == 21

    @pytest.mark.parametrize(
        "layer_id,kind,message",
        [
            ("", LayerErrorKind.MISSING, "no layer id"),
            ("0", LayerErrorKind.MISSING, "no layer id"),
            (None, LayerErrorKind.MISSING, "no layer id"),
            ("99", LayerErrorKind.UNSUPPORTED, "unsupported layer id: 99"),
            ("199", LayerErrorKind.UNSUPPORTED, "unsupported layer id: 199"),
            ("9", LayerErrorKind.UNKNOWN, "unknown layer id: 9"),
            ("200", LayerErrorKind.UNKNOWN, "unknown layer id: 200"),
            ("abc", LayerErrorKind.UNKNOWN, "unknown layer id: abc"),
        ],
    )
    def test_unresolvable(self, layer_id: str | None, kind: LayerErrorKind, message: str) -> None:
        table = LayerTable()
        result = table.resolve(layer_id)
        assert not result.ok
        assert result.kind is kind
        assert result.error == message
        assert table.max_inner == 0

    def test_unwrap(self) -> None:
        table = LayerTable()
        assert table.resolve("1").unwrap() == "F.Cu"
        with pytest.raises(LayerResolutionError) as exc_info:
            table.resolve("999").unwrap()
        assert exc_info.value.layer_id == "999"

    def test_declarations_without_inner_layers(self) -> None:
        entries = flatten_and_filter(LayerTable().declarations())
        assert entries[0] == [0, "F.Cu", "signal"]
        assert entries[1] == [31, "B.Cu", "signal"]
        assert entries[-1] == [49, "F.Fab", "user", "hide"]
        assert len(entries) == 20

    def test_declarations_list_exactly_max_inner_layers(self) -> None:
        table = LayerTable()
        table.resolve("23")
        entries = flatten_and_filter(table.declarations())
        names = [entry[1] for entry in entries]
        assert names[:5] == ["F.Cu", "In1.Cu", "In2.Cu", "In3.Cu", "B.Cu"]
        assert "In4.Cu" not in names


class TestIsCopper:
    @pytest.mark.parametrize(
        "name,expected",
        [("F.Cu", True), ("In3.Cu", True), ("F.SilkS", False), ("Edge.Cuts", False)],
    )
    def test_is_copper(self, name: str, expected: bool) -> None:
        assert is_copper(name) is expected
