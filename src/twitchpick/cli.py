"""Command-line interface for twitchpick."""

import argparse
import logging
import pathlib
import sys

from . import __version__
from .api import TwitchClient
from .config import load_credentials, load_settings, validate_limit
from .errors import TwitchPickError
from .launcher import Launcher
from .player import StreamPlayer

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: pathlib.Path | None = None) -> None:
    """
    Configure logging for the application.

    Args:
        debug: Enable debug level logging if True.
        log_file: Also write log records to this file.
    """
    level = logging.DEBUG if debug else logging.WARNING
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twitchpick",
        description="twitchpick - pick a live Twitch stream and watch it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Browse the top games, then their streams
  twitchpick

  # Streams of one game
  twitchpick --game "Chess"

  # Watch a channel directly
  twitchpick --stream somechannel

  # List followed live channels without launching anything
  twitchpick --follow --info

Credentials are read from TWITCH_ACCESS_TOKEN and TWITCH_CLIENT_ID.
        """,
    )
    parser.add_argument("--game", "-g", type=str, help="Gets streams of game")
    parser.add_argument("--stream", "-s", type=str, help="Watch this channel")
    parser.add_argument("--follow", "-f", action="store_true", help="Gets followed streams")
    parser.add_argument("--info", "-i", action="store_true", help="Only list info")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config",
        "-c",
        type=pathlib.Path,
        help="Path to a YAML configuration file (default: ~/.config/twitchpick/config.yaml)",
    )
    parser.add_argument("--limit", "-l", type=int, help="Maximum entries per listing")
    parser.add_argument("--player", "-p", type=str, help="Player executable to launch")
    parser.add_argument("--log-file", type=pathlib.Path, help="Also write logs to this file")
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the twitchpick CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(args.debug, args.log_file)

    try:
        credentials = load_credentials()
        settings = load_settings(args.config)
        if args.limit is not None:
            settings.limit = validate_limit(args.limit)
        if args.player:
            settings.player = args.player

        launcher = Launcher(
            client=TwitchClient(
                credentials.token,
                credentials.client_id,
                timeout=settings.timeout,
            ),
            player=StreamPlayer(settings.player, settings.quality),
            limit=settings.limit,
        )
        launcher.run(
            game=args.game,
            channel=args.stream,
            follow=args.follow,
            info=args.info,
        )
    except TwitchPickError as e:
        if e.user_intent:
            logger.debug("Stopped: %s", type(e).__name__)
            return 0
        logger.debug("Failed", exc_info=True)
        print(e, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
