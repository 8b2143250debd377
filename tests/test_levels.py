"""Tests for level parsing, loading and counting."""

import pytest

import config
from game.levels import LevelLoadError, LevelSet, count_levels, parse_level
from game.world import CellKind


def test_parse_level_alphabet():
    g = parse_level("#####\n#POXD\n#   #\n#####\n")
    assert (g.width, g.height) == (5, 4)
    assert g.kind_at(1, 1) is CellKind.PLAYER
    assert g.kind_at(2, 1) is CellKind.COIN
    assert g.kind_at(3, 1) is CellKind.ENEMY
    assert g.kind_at(4, 1) is CellKind.DOOR
    assert g.kind_at(2, 2) is CellKind.FLOOR


def test_parse_level_handles_crlf_and_trailing_blank_lines():
    g = parse_level("###\r\n#P#\r\n###\r\n\r\n")
    assert (g.width, g.height) == (3, 3)


@pytest.mark.parametrize(
    "text,fragment",
    [
        ("", "empty"),
        ("\n\n", "empty"),
        ("####\n#P#\n####", "width"),
        ("####\n#P?#\n####", "unknown"),
        ("####\n#  #\n####", "found 0"),
        ("####\n#PP#\n####", "found 2"),
    ],
)
def test_parse_level_rejects_malformed(text, fragment):
    with pytest.raises(LevelLoadError, match=fragment):
        parse_level(text)


def test_level_set_load_and_count(tmp_path):
    (tmp_path / "level0.txt").write_text("###\n#P#\n###\n", encoding="utf-8")
    (tmp_path / "level1.txt").write_text("####\n#PD#\n####\n", encoding="utf-8")
    (tmp_path / "notes.md").write_text("not a level", encoding="utf-8")
    (tmp_path / "level2.txt.bak").write_text("###", encoding="utf-8")

    levels = LevelSet(tmp_path)
    assert levels.count() == 2
    assert levels.path_for(1) == tmp_path / "level1.txt"
    assert levels.load(1).kind_at(2, 1) is CellKind.DOOR


def test_missing_level_file_is_a_load_error(tmp_path):
    with pytest.raises(LevelLoadError, match="failed to open file"):
        LevelSet(tmp_path).load(0)


def test_malformed_level_file_is_a_load_error(tmp_path):
    (tmp_path / "level0.txt").write_text("###\n#P\n###\n", encoding="utf-8")
    with pytest.raises(LevelLoadError):
        LevelSet(tmp_path).load(0)


def test_missing_level_directory_is_a_load_error(tmp_path):
    with pytest.raises(LevelLoadError, match="not found"):
        count_levels(tmp_path / "nope")


def test_bundled_levels_are_well_formed():
    levels = LevelSet(config.LEVEL_DIR)
    assert levels.count() == 3
    for i in range(levels.count()):
        g = levels.load(i)
        assert (g.width, g.height) == (config.DEFAULT_GRID_WIDTH, config.DEFAULT_GRID_HEIGHT)
        assert g.count_cells(CellKind.PLAYER) == 1
        assert g.count_cells(CellKind.DOOR) == 1
        # status line row holds nothing but wall
        assert all(g.kind_at(x, 0) is CellKind.WALL for x in range(g.width))
