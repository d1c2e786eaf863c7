#!/usr/bin/env python3
"""
SRT Editor - Main Application Entry Point
=========================================

A subtitle clean-up tool for SubRip (.srt) files with support for:
- Encoding detection (UTF-8, UTF-16, Windows-1250, Windows-1251)
- Removal of known advertisement subtitles
- Serbian Latin to Cyrillic transliteration
- Long line rebalancing
- Reading speed, minimum duration and minimum gap correction
- Output encoding selection, diffs and statistics

Usage:
    python srted.py process movie.srt
    python srted.py diff movie.srt --enable cyrillization
    python srted.py info movie.srt
    python srted.py detect *.srt
    python srted.py plugins
    python srted.py configure gap --set min_gap=100

    # Help
    python srted.py --help
    python srted.py <command> --help
"""

import sys
from pathlib import Path

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from utils.constants import APP_NAME, APP_VERSION
from ui.cli import CLIHandler


def main(argv=None) -> int:
    """
    Main application entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    cli_handler = CLIHandler()
    parser = cli_handler.create_parser()

    args = parser.parse_args(argv)
    try:
        return cli_handler.handle_command(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


def print_system_info():
    """Print system and application information."""
    import platform

    print(f"{APP_NAME} v{APP_VERSION}")
    print(f"Python {platform.python_version()}")
    print(f"Platform: {platform.system()} {platform.release()}")
    print()


def run():
    """Console script entry point."""
    if '--debug' in sys.argv or '-d' in sys.argv:
        print_system_info()
    sys.exit(main())


if __name__ == '__main__':
    run()
