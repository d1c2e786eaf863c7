"""
Ordered execution of the enabled plugins over one document.

Every run starts again from the document's original timeline and original
encoding, so running twice with the same settings gives the same result.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from core.subtitle_formats import SubtitleDocument, SubtitleEntry
from utils.constants import (
    PLUGIN_CYRILLIZATION, PLUGIN_ENCODING, PLUGIN_REMOVE_ADS, WINDOWS_1250, WINDOWS_1251,
)
from utils.logging_config import get_logger

from .base import PipelineContext, PluginDescriptor
from .encoding import target_encoding
from .registry import ALL_PLUGINS

logger = get_logger(__name__)

ENCODING_OVERRIDE_NOTE = "Encoding override: Windows-1250 → Windows-1251 (Cyrillic required)"


@dataclass
class PluginOutcome:
    """What one enabled plugin did to the timeline."""
    plugin_id: str
    changed: int = 0
    removed: int = 0


@dataclass
class ChangeReport:
    """Human-readable processing log for one document."""
    file_name: str
    summaries: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    outcomes: List[PluginOutcome] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.summaries or self.notes)

    def lines(self) -> List[str]:
        """Summaries followed by notes, for display."""
        return self.summaries + self.notes


class PluginPipeline:
    """Runs the enabled plugins in registry order."""

    def __init__(self, context: PipelineContext,
                 plugins: Sequence[PluginDescriptor] = ALL_PLUGINS):
        """
        Initialize the pipeline.

        Args:
            context: Read-only configuration snapshot shared by every plugin
            plugins: Plugins in execution order
        """
        self.context = context
        self.plugins = list(plugins)

    def run(self, document: SubtitleDocument) -> Tuple[SubtitleDocument, ChangeReport]:
        """
        Process a document.

        Args:
            document: Loaded document; it is not modified

        Returns:
            Tuple of (document with the new working timeline and encoding,
            change report)

        Example:
            >>> pipeline = PluginPipeline(PluginSettings().snapshot())
            >>> processed, report = pipeline.run(document)
            >>> report.summaries
            ['CPS (Characters Per Second) applied in 3 subtitle lines']
        """
        report = ChangeReport(file_name=document.name)
        entries = document.fresh_copy()

        for plugin in self.plugins:
            if not self.context.is_active(plugin.id):
                continue

            before = [entry.copy() for entry in entries]
            entries = list(plugin.run(entries, self.context.params_for(plugin.id),
                                      self.context))

            outcome = self._compare(plugin.id, before, entries)
            report.outcomes.append(outcome)
            summary = self._summarize(plugin, outcome)
            if summary:
                report.summaries.append(summary)
                logger.debug(f"{document.name}: {summary}")

        encoding = self._resolve_encoding(document.original_encoding, report)

        logger.info(f"Processed {document.name}: {len(report.summaries)} plugin(s) changed "
                    f"the timeline, output encoding {encoding}")
        return document.with_working(entries, encoding), report

    @staticmethod
    def _compare(plugin_id: str, before: List[SubtitleEntry],
                 after: List[SubtitleEntry]) -> PluginOutcome:
        """Count changed entries, or removed ones when the timeline shrank."""
        if len(after) < len(before):
            return PluginOutcome(plugin_id, removed=len(before) - len(after))

        changed = sum(1 for old, new in zip(before, after) if not old.same_content(new))
        changed += len(after) - len(before)
        return PluginOutcome(plugin_id, changed=changed)

    @staticmethod
    def _summarize(plugin: PluginDescriptor, outcome: PluginOutcome) -> str:
        if outcome.removed and plugin.id == PLUGIN_REMOVE_ADS:
            plural = 's' if outcome.removed > 1 else ''
            return f"Removed {outcome.removed} ad subtitle{plural}"
        if outcome.removed:
            return f"{plugin.name} removed {outcome.removed} subtitle lines"
        if not outcome.changed:
            return ''
        if plugin.id == PLUGIN_CYRILLIZATION:
            return "Transliterated to Cyrillic"
        return f"{plugin.name} applied in {outcome.changed} subtitle lines"

    def _resolve_encoding(self, encoding: str, report: ChangeReport) -> str:
        """Apply the encoding target, then force Cyrillic-capable output when needed."""
        if self.context.is_active(PLUGIN_ENCODING):
            target = target_encoding(self.context)
            if target and target != encoding:
                report.notes.append(f"Encoding changed: {encoding} → {target}")
                encoding = target

        if self.context.is_active(PLUGIN_CYRILLIZATION) and encoding == WINDOWS_1250:
            report.notes.append(ENCODING_OVERRIDE_NOTE)
            encoding = WINDOWS_1251

        return encoding
