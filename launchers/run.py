import argparse
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from engine.app.loader import load_game
from engine.app.loop import run_game
from engine.log import configure


def parse_screen(value: str):
    try:
        w, h = map(int, value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}")
    return w, h


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reflexes Launcher")
    parser.add_argument("--game", default="reflexes", help="Game folder name under games/")
    parser.add_argument("--screen", type=parse_screen, default=None,
                        help="Screen size WxH, e.g. 500x300 (defaults to the game manifest)")
    parser.add_argument("--fps", type=int, default=60, help="Frame rate cap")
    parser.add_argument("--debug", action="store_true", help="Log every reaction time and state change")
    args = parser.parse_args(argv)

    log = configure(debug=args.debug)

    try:
        game, manifest = load_game(args.game)
    except (FileNotFoundError, AttributeError, ValueError) as e:
        log.error("could not load %s: %s", args.game, e)
        return 2

    run_game(
        game,
        manifest,
        screen_size=args.screen,
        fps=args.fps,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
