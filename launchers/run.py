import argparse
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from engine.app.loader import list_games
from engine.app.loop import GAMES_DIR, run_game
from engine.app.observability import setup_logging


def parse_screen(value: str) -> tuple[int, int]:
    try:
        w, h = map(int, value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {value!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"screen size must be positive, got {value!r}")
    return w, h


def main(argv=None):
    parser = argparse.ArgumentParser(description="Tap Arcade Launcher")
    parser.add_argument("--game", default="crewmate_crunch", help="Game folder name under games/")
    parser.add_argument("--screen", type=parse_screen, default="540x900", help="Screen size WxH, e.g. 540x900")
    parser.add_argument("--fps", type=int, default=60, help="Frame rate cap")
    parser.add_argument("--mirror", action="store_true", help="Mirror the game window horizontally")
    parser.add_argument("--mute", action="store_true", help="Disable audio cues")
    parser.add_argument("--debug", action="store_true", help="Draw debug frame outline")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING...)")
    parser.add_argument("--list", action="store_true", help="List available games and exit")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    if args.list:
        for game_id in list_games(GAMES_DIR):
            print(game_id)
        return

    run_game(
        game_id=args.game,
        screen_size=args.screen,
        fps=args.fps,
        mirror=args.mirror,
        mute=args.mute,
        debug=args.debug,
    )


if __name__ == "__main__":
    main()
