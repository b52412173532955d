"""Tests for the game configuration."""

import json

import pytest

from grace_snake.config import GameConfig
from grace_snake.grid import Cell


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.board_size == 16
        assert cfg.init_length == 4
        assert cfg.speed == pytest.approx(0.15)
        assert cfg.death_time == pytest.approx(0.6)
        assert cfg.food_break == pytest.approx(0.1)
        assert cfg.forgiveness_break == pytest.approx(0.1)

    def test_default_layout(self):
        cfg = GameConfig()
        assert cfg.default_body_cells == [Cell(1, 8), Cell(2, 8), Cell(3, 8), Cell(4, 8)]
        assert cfg.default_food_cell == Cell(12, 8)

    def test_layout_scales_with_board(self):
        cfg = GameConfig(board_size=20, init_length=3)
        assert cfg.default_body_cells[-1] == Cell(3, 10)
        assert cfg.default_food_cell == Cell(15, 10)

    def test_invalid_init_length(self):
        with pytest.raises(ValueError, match="init_length"):
            GameConfig(init_length=0)

    def test_invalid_timing(self):
        with pytest.raises(ValueError, match="speed_ms"):
            GameConfig(speed_ms=0)
        with pytest.raises(ValueError, match="forgiveness_break_ms"):
            GameConfig(forgiveness_break_ms=-5)

    def test_invalid_cell_size(self):
        with pytest.raises(ValueError, match="cell_size"):
            GameConfig(cell_size=0.0)

    def test_body_must_not_reach_food(self):
        with pytest.raises(ValueError, match="board_size"):
            GameConfig(board_size=4, init_length=4)
        with pytest.raises(ValueError, match="board_size"):
            GameConfig(board_size=16, init_length=12)

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(board_size=20, speed_ms=120, seed=9)
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        assert GameConfig.load(path) == cfg

    def test_load_rejects_unknown_keys(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"board_size": 20, "lives": 3}))
        with pytest.raises(ValueError, match="Unknown config keys: lives"):
            GameConfig.load(path)

    def test_load_rejects_non_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[16]")
        with pytest.raises(ValueError, match="JSON object"):
            GameConfig.load(path)
