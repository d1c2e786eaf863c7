"""
Command-line interface for the SRT Editor.

This module provides CLI functionality for processing subtitle files with the
plugin pipeline, inspecting diffs and statistics, detecting encodings, and
managing the persisted plugin settings.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from core.codec import EncodingDetector
from core.diff_engine import ADDED, EQUAL, MODIFIED, REMOVED, DiffEngine, DiffRow, DiffSegment
from core.errors import ConfigError, SubtitleEditorError
from core.statistics import StatisticsEngine, StatValue, SubtitleStatistics
from core.subtitle_formats import SubtitleDocument
from core.timing_utils import TimeConverter
from plugins.batch_processor import BatchProcessor
from plugins.settings import PluginSettings
from utils.constants import APP_DESCRIPTION, APP_NAME, APP_VERSION, DEFAULT_SETTINGS_PATH
from utils.file_operations import FileHandler
from utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

# ANSI color codes for diff output
RED = '\033[31m'
GREEN = '\033[32m'
REVERSE = '\033[7m'
RESET = '\033[0m'


def setup_cli_logging(verbose: bool = False, debug: bool = False,
                      use_colors: bool = True, log_file: Optional[Path] = None):
    """Set up logging for CLI operations."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    return setup_logging(level=level, log_file=log_file, use_colors=use_colors)


def parse_number(text: str) -> float:
    """
    Parse a parameter value given on the command line.

    Raises:
        ConfigError: If the text is not a number
    """
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise ConfigError(f"Not a number: {text!r}") from None


def parse_assignment(text: str, qualified: bool) -> Tuple[Optional[str], str, float]:
    """
    Parse ID.KEY=VALUE (qualified) or KEY=VALUE.

    Returns:
        Tuple of (plugin_id or None, key, value)

    Raises:
        ConfigError: If the assignment is malformed
    """
    name, sep, value = text.partition('=')
    if not sep or not name or not value:
        raise ConfigError(f"Expected {'ID.KEY' if qualified else 'KEY'}=VALUE, got {text!r}")

    plugin_id = None
    if qualified:
        plugin_id, dot, name = name.partition('.')
        if not dot or not plugin_id or not name:
            raise ConfigError(f"Expected ID.KEY=VALUE, got {text!r}")
    return plugin_id, name.strip(), parse_number(value.strip())


class CLIHandler:
    """Handles command-line interface operations."""

    def __init__(self):
        """Initialize the CLI handler."""
        self.use_colors = True

    def create_parser(self) -> argparse.ArgumentParser:
        """
        Create the main argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog='srted',
            description=f"{APP_NAME} v{APP_VERSION}\n{APP_DESCRIPTION}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Process files with the saved plugin settings
  srted process movie.srt episode01.srt -o out/

  # Transliterate to Cyrillic for this run only
  srted process movie.srt --enable cyrillization

  # Show what a run would change
  srted diff movie.srt --enable long_lines --set long_lines.max_length=37

  # Compare statistics before and after processing
  srted info movie.srt

  # Persist plugin settings
  srted configure cps --enable --set max_cps=20
            """
        )

        parser.add_argument('--version', action='version', version=f'{APP_NAME} {APP_VERSION}')
        parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
        parser.add_argument('-d', '--debug', action='store_true', help='Enable debug output')
        parser.add_argument('--no-colors', action='store_true', help='Disable colored output')
        parser.add_argument('--log-file', type=Path, help='Also write log messages to this file')
        parser.add_argument('--settings', type=Path, default=DEFAULT_SETTINGS_PATH,
                            help=f'Plugin settings file (default: {DEFAULT_SETTINGS_PATH})')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        self._add_process_parser(subparsers)
        self._add_diff_parser(subparsers)
        self._add_info_parser(subparsers)
        self._add_detect_parser(subparsers)
        self._add_plugins_parser(subparsers)
        self._add_configure_parser(subparsers)

        return parser

    @staticmethod
    def _add_override_arguments(command_parser):
        """Add per-run plugin overrides that are not persisted."""
        command_parser.add_argument('--enable', action='append', default=[], metavar='ID',
                                    help='Enable a plugin for this run')
        command_parser.add_argument('--disable', action='append', default=[], metavar='ID',
                                    help='Disable a plugin for this run')
        command_parser.add_argument('--set', action='append', default=[], dest='overrides',
                                    metavar='ID.KEY=VALUE',
                                    help='Set a plugin parameter for this run')

    def _add_process_parser(self, subparsers):
        """Add process command parser."""
        process_parser = subparsers.add_parser(
            'process',
            help='Run the plugin pipeline and write processed files',
            description='Process subtitle files (or directories of them) with the enabled plugins'
        )
        process_parser.add_argument('inputs', type=Path, nargs='+', help='Subtitle files or directories')
        process_parser.add_argument('-o', '--output-dir', type=Path,
                                    help='Output directory (default: next to each input)')
        process_parser.add_argument('-r', '--recursive', action='store_true',
                                    help='Search directories recursively')
        process_parser.add_argument('--parallel', action='store_true',
                                    help='Process files in parallel')
        process_parser.add_argument('--backup', action='store_true',
                                    help='Back up files that would be overwritten')
        process_parser.add_argument('--dry-run', action='store_true',
                                    help='Show the processing log without writing files')
        self._add_override_arguments(process_parser)

    def _add_diff_parser(self, subparsers):
        """Add diff command parser."""
        diff_parser = subparsers.add_parser(
            'diff',
            help='Show the changes a run would make',
            description='Print a line diff between the original and the processed file'
        )
        diff_parser.add_argument('input', type=Path, help='Subtitle file')
        diff_parser.add_argument('--changes-only', action='store_true',
                                 help='Hide unchanged lines')
        self._add_override_arguments(diff_parser)

    def _add_info_parser(self, subparsers):
        """Add info command parser."""
        info_parser = subparsers.add_parser(
            'info',
            help='Show subtitle statistics',
            description='Print statistics for the original and processed timelines'
        )
        info_parser.add_argument('input', type=Path, help='Subtitle file')
        self._add_override_arguments(info_parser)

    def _add_detect_parser(self, subparsers):
        """Add detect command parser."""
        detect_parser = subparsers.add_parser(
            'detect',
            help='Detect subtitle file encodings',
            description='Print the detected encoding of each file with a second opinion'
        )
        detect_parser.add_argument('inputs', type=Path, nargs='+', help='Subtitle files')

    def _add_plugins_parser(self, subparsers):
        """Add plugins command parser."""
        subparsers.add_parser(
            'plugins',
            help='List plugins and their settings',
            description='List plugins in execution order with their current settings'
        )

    def _add_configure_parser(self, subparsers):
        """Add configure command parser."""
        configure_parser = subparsers.add_parser(
            'configure',
            help='Change and save plugin settings',
            description='Change a plugin\'s settings and save them to the settings file'
        )
        configure_parser.add_argument('plugin', help='Plugin identifier')
        state = configure_parser.add_mutually_exclusive_group()
        state.add_argument('--enable', action='store_true', help='Enable the plugin')
        state.add_argument('--disable', action='store_true', help='Disable the plugin')
        configure_parser.add_argument('--set', action='append', default=[], dest='overrides',
                                      metavar='KEY=VALUE', help='Set a parameter')
        configure_parser.add_argument('--reset', action='store_true',
                                      help='Restore the plugin\'s defaults first')

    def handle_command(self, args) -> int:
        """
        Handle the parsed command-line arguments.

        Args:
            args: Parsed arguments from argparse

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        self.use_colors = not args.no_colors and sys.stdout.isatty()
        setup_cli_logging(args.verbose, args.debug, not args.no_colors, args.log_file)

        if not args.command:
            logger.error("No command specified. Use --help for usage information.")
            return 1

        handlers = {
            'process': self._handle_process,
            'diff': self._handle_diff,
            'info': self._handle_info,
            'detect': self._handle_detect,
            'plugins': self._handle_plugins,
            'configure': self._handle_configure,
        }

        try:
            return handlers[args.command](args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 1
        except (SubtitleEditorError, IOError) as e:
            logger.error(str(e))
            return 1

    def _load_settings(self, args) -> PluginSettings:
        """Load persisted settings and apply the per-run overrides."""
        settings = PluginSettings.load(args.settings)
        for plugin_id in getattr(args, 'enable', []):
            settings.set_enabled(plugin_id, True)
        for plugin_id in getattr(args, 'disable', []):
            settings.set_enabled(plugin_id, False)
        for assignment in getattr(args, 'overrides', []):
            plugin_id, key, value = parse_assignment(assignment, qualified=True)
            settings.set_param(plugin_id, key, value)
        return settings

    def _run_single(self, args) -> Tuple[SubtitleDocument, SubtitleDocument, List[str]]:
        """Load and process one file; returns (original, processed, report lines)."""
        if not args.input.exists():
            raise IOError(f"Input file not found: {args.input}")

        processor = BatchProcessor(self._load_settings(args).snapshot())
        document = processor.load_document(args.input.name, FileHandler.read_bytes(args.input))
        processed, report = processor.pipeline.run(document)
        return document, processed, report.lines()

    def _handle_process(self, args) -> int:
        """Handle process command."""
        files = FileHandler.collect_inputs(args.inputs, args.recursive)
        if not files:
            logger.error("No subtitle files found")
            return 1

        processor = BatchProcessor(self._load_settings(args).snapshot())
        results = processor.process_files(files, output_dir=args.output_dir,
                                          parallel=args.parallel,
                                          create_backup=args.backup,
                                          dry_run=args.dry_run)

        for result in results['results']:
            print(f"\n{result.source.name}")
            if result.failed:
                print(f"  ✗ {result.error}")
                continue
            for error in result.document.diagnostics:
                print(f"  ! {error}")
            lines = result.report.lines()
            if not lines:
                print("  No changes")
            for line in lines:
                print(f"  • {line}")
            if result.output_path:
                print(f"  → {result.output_path}")

        print()
        print(processor.get_processing_summary(results))
        return 0 if results['failed'] == 0 else 1

    def _handle_diff(self, args) -> int:
        """Handle diff command."""
        document, processed, report_lines = self._run_single(args)
        rows = DiffEngine.diff_timelines(document.original_entries, processed.entries)

        for line in report_lines:
            print(f"# {line}")
        for row in rows:
            if args.changes_only and row.kind == EQUAL:
                continue
            for text in self.format_diff_row(row):
                print(text)

        counts = DiffEngine.summarize(rows)
        print(f"\n{counts[MODIFIED]} modified, {counts[REMOVED]} removed, "
              f"{counts[ADDED]} added")
        return 0

    def format_diff_row(self, row: DiffRow) -> List[str]:
        """Render one diff row as output lines."""
        if row.kind == EQUAL:
            return [f"  {row.original}"]
        if row.kind == REMOVED:
            return [self._colorize(f"- {row.original}", RED)]
        if row.kind == ADDED:
            return [self._colorize(f"+ {row.processed}", GREEN)]
        return [
            self._colorize("- ", RED) + self._render_segments(row.original_segments, RED),
            self._colorize("+ ", GREEN) + self._render_segments(row.processed_segments, GREEN),
        ]

    def _render_segments(self, segments: List[DiffSegment], color: str) -> str:
        if not self.use_colors:
            return ''.join(f"[{segment.text}]" if segment.changed else segment.text
                           for segment in segments)
        return ''.join(f"{REVERSE}{color}{segment.text}{RESET}" if segment.changed
                       else segment.text for segment in segments)

    def _colorize(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_colors else text

    def _handle_info(self, args) -> int:
        """Handle info command."""
        document, processed, report_lines = self._run_single(args)
        original_stats = StatisticsEngine.compute(document.original_entries)
        processed_stats = StatisticsEngine.compute(processed.entries)

        print(f"{args.input.name}: {EncodingDetector.encoding_label(document.original_encoding)}"
              f" → {EncodingDetector.encoding_label(processed.encoding)}")
        for line in report_lines:
            print(f"  • {line}")
        print()
        print(f"{'':<24}{'Original':>20}{'Processed':>20}")
        for label, original, after in self.stat_rows(original_stats, processed_stats):
            print(f"{label:<24}{original:>20}{after:>20}")
        return 0

    @staticmethod
    def stat_rows(original: SubtitleStatistics,
                  processed: SubtitleStatistics) -> List[Tuple[str, str, str]]:
        """Build (label, original, processed) rows for the statistics table."""
        def stat(value: StatValue, fmt: str) -> str:
            text = format(value.value, fmt)
            return f"{text} (#{value.position})" if value.position else text

        rows = [
            ("Subtitles", str(original.entry_count), str(processed.entry_count)),
            ("Total duration", TimeConverter.milliseconds_to_readable(original.total_duration_ms),
             TimeConverter.milliseconds_to_readable(processed.total_duration_ms)),
            ("Max CPS", stat(original.max_cps, '.1f'), stat(processed.max_cps, '.1f')),
            ("Max line length", stat(original.max_line_length, 'd'),
             stat(processed.max_line_length, 'd')),
            ("Max duration (s)", stat(original.max_duration, '.3f'),
             stat(processed.max_duration, '.3f')),
            ("Min duration (s)", stat(original.min_duration, '.3f'),
             stat(processed.min_duration, '.3f')),
            ("More than two lines", stat(original.more_than_two_lines, 'd'),
             stat(processed.more_than_two_lines, 'd')),
        ]
        for threshold in original.cps_over:
            rows.append((f"CPS > {threshold}", str(original.cps_over[threshold]),
                         str(processed.cps_over.get(threshold, 0))))
        for threshold in original.duration_under:
            rows.append((f"Duration < {threshold} ms", str(original.duration_under[threshold]),
                         str(processed.duration_under.get(threshold, 0))))
        return rows

    def _handle_detect(self, args) -> int:
        """Handle detect command."""
        failed = 0
        for path in args.inputs:
            try:
                data = FileHandler.read_bytes(path)
            except IOError as e:
                logger.error(str(e))
                failed += 1
                continue

            encoding = EncodingDetector.detect_encoding(data)
            guess = EncodingDetector.second_opinion(data) or 'unknown'
            print(f"{path.name}: {encoding} "
                  f"({EncodingDetector.encoding_label(encoding)}; charset-normalizer: {guess})")
        return 0 if failed == 0 else 1

    def _handle_plugins(self, args) -> int:
        """Handle plugins command."""
        settings = PluginSettings.load(args.settings)
        for position, plugin in enumerate(settings.plugins, start=1):
            state = 'on' if settings.is_enabled(plugin.id) else 'off'
            print(f"{position}. {plugin.id:<14} [{state:>3}] {plugin.name}")
            print(f"   {plugin.description}")
            for param in plugin.params:
                value = settings.get_param(plugin.id, param.key)
                bounds = param.describe()
                suffix = f" ({bounds})" if bounds else ''
                print(f"   {param.key} = {value:g}  {param.label}{suffix}")
        return 0

    def _handle_configure(self, args) -> int:
        """Handle configure command."""
        settings = PluginSettings.load(args.settings)
        settings.descriptor(args.plugin)

        if args.reset:
            settings.reset(args.plugin)
        if args.enable:
            settings.set_enabled(args.plugin, True)
        elif args.disable:
            settings.set_enabled(args.plugin, False)
        for assignment in args.overrides:
            _, key, value = parse_assignment(assignment, qualified=False)
            settings.set_param(args.plugin, key, value)

        settings.save(args.settings)
        state = 'enabled' if settings.is_enabled(args.plugin) else 'disabled'
        params = ', '.join(f"{key}={value:g}" for key, value in settings.params(args.plugin).items())
        print(f"{args.plugin}: {state}" + (f" ({params})" if params else ''))
        return 0
