from __future__ import annotations
import importlib
from pathlib import Path
import yaml
from typing import Dict, Any

GAMES_DIR = Path(__file__).resolve().parents[2] / "games"


def game_root_for(game_id: str) -> Path:
    game_root = GAMES_DIR / game_id
    if not game_root.is_dir():
        raise FileNotFoundError(f"No game folder named {game_id!r} in {GAMES_DIR}")
    return game_root


def load_game_manifest(game_root: Path) -> Dict[str, Any]:
    manifest = game_root / "manifest.yaml"
    if not manifest.exists():
        raise FileNotFoundError(f"Missing manifest.yaml in {game_root}")
    with open(manifest, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{manifest} must contain a mapping, got {type(data).__name__}")
    return data


def load_game_module(game_root: Path):
    """
    Imports games/<id>/main.py as games.<id>.main and returns the module object.
    The file must define a get_game() -> Game factory.
    """
    main_py = game_root / "main.py"
    if not main_py.exists():
        raise FileNotFoundError(f"Missing main.py in {game_root}")
    module = importlib.import_module(f"games.{game_root.name}.main")
    if not hasattr(module, "get_game"):
        raise AttributeError("Game module must define get_game()")
    return module


def manifest_window_size(manifest: Dict[str, Any], default: tuple[int, int]) -> tuple[int, int]:
    size = (manifest.get("window") or {}).get("size")
    if size is None:
        return default
    w, h = size
    return int(w), int(h)


def load_game(game_id: str):
    """
    Returns (game instance, manifest) for games/<game_id>.
    A module-level validate_manifest(manifest), if present, runs before the
    game is built so bad options fail before any window opens.
    """
    game_root = game_root_for(game_id)
    manifest = load_game_manifest(game_root)
    module = load_game_module(game_root)
    validate = getattr(module, "validate_manifest", None)
    if validate is not None:
        validate(manifest)
    return module.get_game(), manifest
