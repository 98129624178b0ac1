"""End-to-end board conversion against a small EasyEDA board document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from easyeda_kicad.config import ConversionPolicy, EdgeRoundingPolicy
from easyeda_kicad.sexp import Document, decode, normalize
from easyeda_kicad.shapes import convert_board

FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "minimal_board.json"


@pytest.fixture
def board_json() -> dict[str, Any]:
    return json.loads(FIXTURE_PATH.read_text(encoding="utf-8"))


@pytest.fixture
def board(board_json: dict[str, Any]) -> Document:
    return convert_board(board_json)


def _messages(doc: Document) -> list[str]:
    return [node[1] for node in doc.find_all("gr_text") if str(node[1]).startswith("#")]


class TestBoardHeader:
    def test_root(self, board: Document) -> None:
        assert board.name == "kicad_pcb"
        assert board.find("version") == ["version", 20210220]
        assert board.find("generator") == ["generator", "pcbnew"]
        assert board.find("general") == ["general", ["thickness", 1.6]]
        assert board.find("paper") == ["paper", "A4"]

    def test_pretty_output_starts_with_header(self, board: Document) -> None:
        text = board.to_pretty_string()
        assert text.startswith(
            "(kicad_pcb (version 20210220) (generator pcbnew) (general (thickness 1.6))"
        )
        assert text.endswith(")\n")

    def test_layers_include_used_inner_layer(self, board: Document) -> None:
        layers = Document(board.find("layers")).structure
        names = [entry[1] for entry in layers[1:]]
        assert names[:3] == ["F.Cu", "In1.Cu", "B.Cu"]
        assert "In2.Cu" not in names

    def test_nets_declared(self, board: Document) -> None:
        assert board.find_all("net") == [["net", 0, ""], ["net", 1, "GND"], ["net", 2, "VCC"]]


class TestBoardElements:
    def test_tracks(self, board: Document) -> None:
        segments = board.find_all("segment")
        assert len(segments) == 1
        assert ["net", 1] in segments[0]
        assert len(board.find_all("gr_line")) == 2

    def test_arc_on_outline(self, board: Document) -> None:
        (arc,) = board.find_all("gr_arc")
        assert ["layer", "Edge.Cuts"] in arc
        assert ["angle", 90.0] in arc

    def test_footprints(self, board: Document) -> None:
        names = [fp[1] for fp in board.find_all("footprint")]
        assert names == [
            "EasyEDA:R0603",
            "AutoGenerated:MountingHole_2.54mm",
            "AutoGenerated:TH_pad_gge14",
        ]

    def test_footprint_children(self, board: Document) -> None:
        footprint = Document(board.find("footprint"))
        assert footprint.find("at") == ["at", pytest.approx(76.2), pytest.approx(76.2), 90.0]
        assert len(footprint.find_all("fp_line")) == 1
        texts = footprint.find_all("fp_text")
        assert [t[1] for t in texts] == ["value", "user"]
        assert ["layer", "F.Fab"] in texts[0]
        assert texts[1][2] == "gge9"
        assert footprint.find("attr") == ["attr", "smd"]
        (pad,) = footprint.find_all("pad")
        assert pad[1:4] == [1, "smd", "circle"]
        assert pad[-1] == ["net", 2, "VCC"]

    def test_board_pad(self, board: Document) -> None:
        footprint = Document(board.find_all("footprint")[-1])
        assert footprint.find("attr")[1] == "through_hole"
        assert footprint.find_all("fp_text")[1][2] == "hole_0.91_mm"
        (pad,) = footprint.find_all("pad")
        assert pad[2] == "thru_hole"
        assert pad[-1] == ["drill", "oval", pytest.approx(0.457), pytest.approx(0.914)]

    def test_footprint_via_moved_to_board(self, board: Document) -> None:
        vias = board.find_all("via")
        assert len(vias) == 2
        assert [via[-1] for via in vias] == [["net", 2], ["net", 1]]
        assert not list(Document(board.find("footprint")).find_recursive("via"))

    def test_zones(self, board: Document) -> None:
        zones = board.find_all("zone")
        assert len(zones) == 3
        cu_zone = next(z for z in zones if ["net_name", "VCC"] in z)
        assert ["layer", "In1.Cu"] in cu_zone
        keepout = next(z for z in zones if ["net", 0] in z)
        assert any(isinstance(item, list) and item[0] == "keepout" for item in keepout)
        pour = next(z for z in zones if ["net_name", "GND"] in z)
        assert ["layer", "F.Cu"] in pour
        assert ["priority", 0] in pour

    def test_text(self, board: Document) -> None:
        texts = [t for t in board.find_all("gr_text") if "Hello" in t]
        assert len(texts) == 1
        assert ["layer", "F.SilkS"] in texts[0]


class TestBoardDiagnostics:
    def test_messages_in_order(self, board: Document) -> None:
        messages = _messages(board)
        assert len(messages) == 4
        assert messages[0].startswith("#1: Info: below are the conversion remarks.")
        assert messages[1] == (
            "#2: Warning: unsupported VIA found (gge12) of gge9 on net VCC; converted in pcb via"
        )
        assert messages[2].startswith("#3: Info: total of 2 Cu zones were created.")
        assert messages[3].startswith("#4: Info: total of 1 keep-out zones were created.")

    def test_messages_stacked_on_comments_layer(self, board: Document) -> None:
        notes = [t for t in board.find_all("gr_text") if str(t[1]).startswith("#")]
        ys = [note[2][2] for note in notes]
        assert ys[:2] == pytest.approx([16.2, 32.4])
        assert ys == sorted(ys)
        assert all(["layer", "Cmts.User"] in note for note in notes)
        assert all(note[2][1] == -200 for note in notes)

    def test_messages_after_elements(self, board: Document) -> None:
        structure = board.structure
        first_note = next(
            i
            for i, node in enumerate(structure)
            if isinstance(node, list) and node[0] == "gr_text" and str(node[1]).startswith("#")
        )
        assert all(
            node[0] == "gr_text" and str(node[1]).startswith("#")
            for node in structure[first_note:]
        )

    def test_summary_logged(
        self, board_json: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="easyeda_kicad"):
            convert_board(board_json)
        assert "In total 4 messages were created" in caplog.text
        assert "Converting board with 12 shapes and 3 nets" in caplog.text


class TestBoardRoundTrip:
    def test_decoded_text_matches_tree(self, board: Document) -> None:
        assert decode(board.to_string()) == normalize(board.root)

    def test_pretty_text_decodes_to_same_document(self, board: Document) -> None:
        assert Document.from_string(board.to_pretty_string()) == Document.from_string(
            board.to_string()
        )

    def test_conversion_is_deterministic(self, board_json: dict[str, Any]) -> None:
        assert convert_board(board_json).to_string() == convert_board(board_json).to_string()


class TestBoardPolicy:
    def test_outline_rounding_disabled(self, board_json: dict[str, Any]) -> None:
        policy = ConversionPolicy(edge_rounding=EdgeRoundingPolicy(enabled=False))
        doc = convert_board(board_json, policy)
        (arc,) = doc.find_all("gr_arc")
        assert arc[2][1] == pytest.approx(2.54)

    def test_empty_board(self) -> None:
        doc = convert_board({"shape": []})
        assert doc.find_all("net") == [["net", 0, ""]]
        assert len(_messages(doc)) == 1
