import argparse
import logging

import pytest

from engine.app.loader import (
    game_root_for, load_game, load_game_manifest, load_game_module, manifest_window_size)
from games.reflexes.main import ReflexGame
from launchers.run import main, parse_screen


def test_load_reflexes_game():
    game, manifest = load_game("reflexes")
    assert isinstance(game, ReflexGame)
    assert manifest["name"] == "What's your reflexes?"
    assert manifest_window_size(manifest, (1, 1)) == (500, 300)


def test_window_size_default():
    assert manifest_window_size({}, (640, 480)) == (640, 480)


def test_unknown_game():
    with pytest.raises(FileNotFoundError):
        game_root_for("no-such-game")


def test_missing_manifest(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_game_manifest(tmp_path)


def test_empty_manifest(tmp_path):
    (tmp_path / "manifest.yaml").write_text("", encoding="utf-8")
    assert load_game_manifest(tmp_path) == {}


def test_manifest_must_be_mapping(tmp_path):
    (tmp_path / "manifest.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_game_manifest(tmp_path)


def test_missing_main(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_game_module(tmp_path)


def test_parse_screen():
    assert parse_screen("800X600") == (800, 600)
    with pytest.raises(argparse.ArgumentTypeError):
        parse_screen("big")


def test_launcher_reports_unknown_game(monkeypatch):
    monkeypatch.setattr("launchers.run.configure", lambda debug=False: logging.getLogger("reflexes.test"))
    assert main(["--game", "no-such-game"]) == 2


def test_launcher_reports_bad_manifest_options(monkeypatch):
    monkeypatch.setattr("launchers.run.configure", lambda debug=False: logging.getLogger("reflexes.test"))
    monkeypatch.setattr(
        "engine.app.loader.load_game_manifest", lambda game_root: {"options": {"min_trials": None}})
    assert main(["--game", "reflexes"]) == 2
