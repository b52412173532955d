"""Tests for the grace-snake CLI."""

import json

import pytest

from grace_snake.cli import _load_script, main
from grace_snake.config import GameConfig
from grace_snake.presentation import Key


class TestCli:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "grace-snake" in capsys.readouterr().out

    def test_write_config(self, tmp_path, capsys):
        path = tmp_path / "cfg.json"
        assert main(["write-config", str(path), "--board-size", "20"]) == 0
        assert GameConfig.load(path) == GameConfig(board_size=20)
        assert "Wrote config" in capsys.readouterr().out

    def test_write_invalid_config(self, tmp_path):
        path = tmp_path / "cfg.json"
        assert main(["write-config", str(path), "--board-size", "4"]) == 2
        assert not path.exists()

    def test_simulate_with_script_and_config(self, tmp_path, capsys):
        cfg_path = tmp_path / "cfg.json"
        GameConfig(board_size=20).save(cfg_path)
        script_path = tmp_path / "keys.json"
        script_path.write_text(json.dumps({"0": ["space", "bogus"]}))
        code = main([
            "simulate", "--config", str(cfg_path), "--script", str(script_path),
            "--frames", "30",
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "Simulation: 30 frames, 0 steps" in out
        assert '"phase": "paused"' in out

    def test_simulate_autoplay(self, capsys):
        code = main([
            "simulate", "--frames", "200", "--seed", "3", "--autoplay",
        ])
        assert code == 0
        assert "Simulation: 200 frames" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "script",
        [{"3": [5]}, {"3": "wd"}, {"3": None}, {"later": ["w"]}, ["w"]],
    )
    def test_simulate_rejects_malformed_script(self, tmp_path, caplog, script):
        script_path = tmp_path / "keys.json"
        script_path.write_text(json.dumps(script))
        code = main([
            "simulate", "--script", str(script_path), "--frames", "5",
        ])
        assert code == 2
        assert "ERROR" in caplog.text

    def test_load_script_parses_frames(self, tmp_path):
        script_path = tmp_path / "keys.json"
        script_path.write_text(json.dumps({"2": ["W", "space", "bogus"]}))
        assert _load_script(str(script_path)) == {2: {Key.W, Key.SPACE}}

    def test_simulate_rejects_unknown_config_key(self, tmp_path):
        cfg_path = tmp_path / "cfg.json"
        cfg_path.write_text(json.dumps({"board_size": 16, "walls": False}))
        assert main(["simulate", "--config", str(cfg_path), "--frames", "5"]) == 2
