"""Amaze CLI entry point.

Provides subcommands for running the Socket.IO game server and for generating
a maze offline to inspect its structure. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except Exception:  # pragma: no cover - exotic stdout replacements
    _COLOR_ENABLED = False


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Amaze Game Server

    Run the Flask/Socket.IO maze server, or generate a maze offline and print
    a JSON summary of its structure. CLI flags take precedence over
    environment variables.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                  Bind address for the web server (default: 0.0.0.0)
          PORT                  Port for the web server (default: 5000)
          DATABASE_URL          SQLAlchemy database URI (default: sqlite:///instance/amaze.db)
          AMAZE_STRICT_MOVES    Reject moves onto undiscovered walls (default: 0)

        Examples:
          # Run the server on a custom port
          python run.py server --port 8080

          # Generate a 30x30 maze with a fixed seed and print its metrics
          python run.py generate --width 30 --height 30 --seed 42
        """
    )

    parser = argparse.ArgumentParser(
        prog="Amaze",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Amaze Server {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the Socket.IO web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask/Socket.IO maze server",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument(
        "--db",
        dest="db_uri",
        default=None,
        help="Database URI (default: env DATABASE_URL or sqlite:///instance/amaze.db)",
    )
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a maze and print a JSON summary",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a maze offline (no server, no database) and print its summary.",
    )
    gen_parser.add_argument("--width", type=int, default=40, help="Maze width, at least 20 (default: 40)")
    gen_parser.add_argument("--height", type=int, default=40, help="Maze height, at least 20 (default: 40)")
    gen_parser.add_argument("--seeds", dest="seed_count", type=int, default=None, help="Random seed points (default: min(w,h)/2)")
    gen_parser.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible maze")
    gen_parser.add_argument("--rows", action="store_true", help="Include the row-major cell grid in the output")
    gen_parser.set_defaults(command="generate")

    if len(argv) == 0:
        argv = ["server"]
    return parser.parse_args(argv)


def generate_summary(args: argparse.Namespace) -> dict:
    from amaze.maze import DOOR, FLOOR, WALL, MazeConfig, MazeGenerator

    gen = MazeGenerator(MazeConfig(width=args.width, height=args.height, seed_count=args.seed_count, seed=args.seed))
    grid = gen.run()
    summary = {
        "seed": gen.seed,
        "width": grid.width,
        "height": grid.height,
        "seeds": len(gen.seeds),
        "cells": {"floor": grid.count(FLOOR), "wall": grid.count(WALL), "door": grid.count(DOOR)},
        "metrics": gen.metrics,
    }
    if args.rows:
        summary["rows"] = grid.to_rows()
    return summary


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()

    if mode == "generate":
        from amaze.maze import InvalidSizeError

        try:
            summary = generate_summary(args)
        except InvalidSizeError as e:
            print(f"[ERROR] {e}", file=sys.stderr)
            return 2
        print(json.dumps(summary, indent=2))
        return 0

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    db_uri_cli = getattr(args, "db_uri", None)
    # DATABASE_URL must be in place before the Flask app is imported
    if db_uri_cli:
        os.environ["DATABASE_URL"] = db_uri_cli
    db_banner = db_uri_cli or os.getenv("DATABASE_URL") or "auto (instance/amaze.db)"
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    from amaze.logging_utils import log
    from amaze.server import start_server

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    title = f"{Fore.CYAN}{Style.BRIGHT}Amaze Server Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "Amaze Server Bootup"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Database:'):12} {value(db_banner)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", host=host, port=port, db=db_banner, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
