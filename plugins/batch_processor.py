"""
Batch processing operations for subtitle files.

This module provides functionality for running the plugin pipeline over
multiple subtitle documents with progress logging and per-file error
handling. All documents in a batch share one configuration snapshot.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.errors import SubtitleEditorError
from core.subtitle_formats import SubtitleDocument
from utils.constants import DEFAULT_MAX_WORKERS, PLUGIN_CYRILLIZATION
from utils.file_operations import FileHandler
from utils.logging_config import get_logger

from .base import PipelineContext
from .pipeline import ChangeReport, PluginPipeline

logger = get_logger(__name__)


@dataclass
class BatchResult:
    """Outcome of processing one file."""
    source: Path
    document: Optional[SubtitleDocument] = None
    report: Optional[ChangeReport] = None
    output_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def changed(self) -> bool:
        return bool(self.document is not None
                    and (self.document.changed or (self.report and self.report.has_changes)))


class BatchProcessor:
    """Handles batch processing operations for subtitle files."""

    def __init__(self, context: PipelineContext, max_workers: int = DEFAULT_MAX_WORKERS):
        """
        Initialize the batch processor.

        Args:
            context: Configuration snapshot shared by every document in the batch
            max_workers: Maximum number of worker threads for parallel processing
        """
        self.context = context
        self.max_workers = max_workers
        self.pipeline = PluginPipeline(context)

    @staticmethod
    def load_document(name: str, data: bytes) -> SubtitleDocument:
        """
        Load a document from a file name and its raw bytes.

        Raises:
            EncodingError: If the bytes cannot be decoded
        """
        return SubtitleDocument.from_bytes(name, data)

    def run_documents(self, documents: Sequence[SubtitleDocument],
                      parallel: bool = False) -> List[Tuple[SubtitleDocument, ChangeReport]]:
        """
        Run the pipeline over several documents.

        Args:
            documents: Loaded documents
            parallel: Whether to use a thread pool

        Returns:
            (processed document, report) pairs in input order

        Example:
            >>> processor = BatchProcessor(PluginSettings().snapshot())
            >>> results = processor.run_documents([doc1, doc2], parallel=True)
        """
        if parallel and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                return list(executor.map(self.pipeline.run, documents))
        return [self.pipeline.run(document) for document in documents]

    @property
    def cyrillic_output(self) -> bool:
        return self.context.is_active(PLUGIN_CYRILLIZATION)

    def process_file(self, file_path: Path, output_dir: Optional[Path] = None,
                     create_backup: bool = False, dry_run: bool = False) -> BatchResult:
        """
        Load, process and write one subtitle file.

        The processed file is written under the document's output name only
        when the pipeline changed the timeline or the encoding.

        Args:
            file_path: Subtitle file to process
            output_dir: Directory for the output (defaults to the file's directory)
            create_backup: Whether to back up a file that would be overwritten
            dry_run: Process without writing anything

        Returns:
            BatchResult for the file (errors are recorded, not raised)
        """
        result = BatchResult(source=file_path)
        try:
            document = self.load_document(file_path.name, FileHandler.read_bytes(file_path))
            result.document, result.report = self.pipeline.run(document)

            if result.changed:
                output_name = result.document.output_name(self.cyrillic_output)
                result.output_path = FileHandler.output_path(file_path, output_name, output_dir)
                if not dry_run:
                    FileHandler.safe_write_bytes(result.output_path, result.document.to_bytes(),
                                                 create_backup=create_backup)
        except (SubtitleEditorError, IOError) as e:
            result.error = str(e)
        return result

    def process_files(self, file_paths: List[Path], output_dir: Optional[Path] = None,
                      parallel: bool = False, create_backup: bool = False,
                      dry_run: bool = False) -> Dict[str, Any]:
        """
        Process multiple subtitle files.

        Args:
            file_paths: List of subtitle file paths
            output_dir: Directory for outputs (defaults to each file's directory)
            parallel: Whether to use parallel processing
            create_backup: Whether to back up files that would be overwritten
            dry_run: Process without writing anything

        Returns:
            Dictionary with processing results; 'results' holds one
            BatchResult per file in input order
        """
        logger.info(f"Starting batch processing for {len(file_paths)} subtitle files")

        def process(path: Path) -> BatchResult:
            return self.process_file(path, output_dir, create_backup, dry_run)

        if parallel and len(file_paths) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                file_results = list(executor.map(process, file_paths))
        else:
            file_results = [process(path) for path in file_paths]

        results = {
            'total': len(file_paths),
            'successful': 0,
            'failed': 0,
            'unchanged': 0,
            'errors': [],
            'processed_files': [],
            'results': file_results,
        }

        for result in file_results:
            if result.failed:
                results['failed'] += 1
                error_msg = f"Error processing {result.source.name}: {result.error}"
                results['errors'].append(error_msg)
                logger.error(f"✗ {error_msg}")
            elif result.changed:
                results['successful'] += 1
                results['processed_files'].append(str(result.output_path))
                action = "Would write" if dry_run else "Wrote"
                logger.info(f"✓ {action}: {result.output_path}")
            else:
                results['unchanged'] += 1
                logger.debug(f"- Unchanged: {result.source.name}")

        return results

    @staticmethod
    def get_processing_summary(results: Dict[str, Any]) -> str:
        """
        Generate a human-readable summary of processing results.

        Args:
            results: Results dictionary from process_files

        Returns:
            Formatted summary string
        """
        summary_lines = [
            "Batch Processing Summary:",
            f"  Total files: {results.get('total', 0)}",
            f"  Processed: {results.get('successful', 0)}",
        ]

        if results.get('unchanged', 0) > 0:
            summary_lines.append(f"  Unchanged: {results['unchanged']}")
        if results.get('failed', 0) > 0:
            summary_lines.append(f"  Failed: {results['failed']}")

        return '\n'.join(summary_lines)
