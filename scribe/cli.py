#!/usr/bin/env python3
"""
Command line interface for scribe.

    scribe someYouTubeLink > output.txt
    scribe someAudioFile.mp3
    scribe someVideoFile.mp4
    scribe version
"""

import sys
import argparse
import logging
from typing import Callable, Dict, List, Optional, TextIO

from scribe import __version__
from scribe.core.models.errors import ScribeError
from scribe.core.pipeline.orchestrator import TranscriptionPipeline
from scribe.infrastructure.config_manager import ConfigurationManager
from scribe.infrastructure.logging_setup import configure_logging

logger = logging.getLogger(__name__)

DESCRIPTION = (
    "CLI app that takes in audio/video files, YouTube links, and produces transcribed text.\n"
    "Depending on your ASR source, transcription will take a couple of minutes."
)


def build_global_parser() -> argparse.ArgumentParser:
    """Options shared by every command, accepted before or after the command name."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--config",
        default=None,
        help="config file (default is $HOME/.scribe.yaml)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every pipeline stage to stderr")
    return parser


def build_parser() -> argparse.ArgumentParser:
    """Parser for the default transcription command."""
    parser = argparse.ArgumentParser(
        prog="scribe",
        description=DESCRIPTION,
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[build_global_parser()],
    )
    parser.add_argument("-t", "--toggle", action="store_true", help="accepted for compatibility, has no effect")
    parser.add_argument("input", help="web video link or path to an audio/video file")
    return parser


def run_version(argv: List[str], stream: Optional[TextIO] = None) -> int:
    """Print the version string."""
    parser = argparse.ArgumentParser(
        prog="scribe version",
        description="Prints the version",
        parents=[build_global_parser()],
    )
    parser.parse_args(argv)
    print(f"v{__version__}", file=stream or sys.stdout)
    return 0


def build_commands() -> Dict[str, Callable[..., int]]:
    """Subcommands dispatched by name before the default command."""
    return {
        "version": run_version,
    }


def run_transcribe(args: argparse.Namespace, stream: Optional[TextIO] = None) -> int:
    """Load configuration, run the pipeline and map failures to an exit status."""
    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        manager = ConfigurationManager(args.config)
        config = manager.load_configuration()
        if manager.config_file_used:
            print(f"Using config file: {manager.config_file_used}", file=sys.stderr)
        if not args.verbose:
            configure_logging(config.log_level)

        TranscriptionPipeline(config).process(args.input, stream)
    except ScribeError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130

    return 0


def main(argv: Optional[List[str]] = None, stream: Optional[TextIO] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)

    # global options are consumed wherever they appear, so the command
    # name is the first leftover positional token
    _, remaining = build_global_parser().parse_known_args(argv)
    positionals = [i for i, token in enumerate(remaining) if not token.startswith("-")]
    commands = build_commands()
    if positionals and remaining[positionals[0]] in commands:
        index = positionals[0]
        return commands[remaining[index]](remaining[:index] + remaining[index + 1:], stream)

    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.input.strip():
        parser.error("input must not be empty")

    return run_transcribe(args, stream)


if __name__ == "__main__":
    sys.exit(main())
