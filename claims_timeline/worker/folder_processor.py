"""
Batch processing of a folder of claims JSON files.

Scanning classifies every ``.json`` file by shape only. Processing normalizes,
renders and writes each valid file in scan order; one file failing never stops
the batch, it is recorded in ``BatchResult.errors``.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from claims_timeline.shared.artifacts import is_json_file_name
from claims_timeline.shared.config import DEFAULT_CONFIG
from claims_timeline.shared.errors import (
    ClaimsTimelineError,
    FileIOError,
    FolderScanError,
    NoValidFilesError,
)
from claims_timeline.shared.models import (
    BatchResult,
    FileError,
    FolderProcessingOptions,
    JsonFileInfo,
    NormalizationConfig,
    RenderOptions,
    TimelineDocument,
)
from claims_timeline.shared.storage import batch_output_path, decode_json, read_text, write_text
from claims_timeline.worker.pipeline import normalize_buffer
from claims_timeline.worker.steps.export_render import DEFAULT_TITLE, render_html
from claims_timeline.worker.steps.step00_validate import classify_structure

logger = logging.getLogger(__name__)

Renderer = Callable[[TimelineDocument, RenderOptions], str]


class FolderProcessor:
    def __init__(
        self,
        config: NormalizationConfig | None = None,
        renderer: Renderer = render_html,
    ):
        self.config = config or DEFAULT_CONFIG
        self.renderer = renderer

    # ── Scan ─────────────────────────────────────────────────────────────

    def scan_folder(self, folder: str | Path, recursive: bool = True) -> list[JsonFileInfo]:
        """
        Enumerate and classify the JSON files under *folder*.
        Raises FolderScanError if the folder itself cannot be read.
        """
        root = Path(folder)
        files: list[JsonFileInfo] = []
        try:
            self._scan_directory(root, files, recursive)
        except OSError as exc:
            raise FolderScanError(f"Failed to scan folder: {folder}. {exc.strerror or exc}") from exc

        return sorted(files, key=lambda f: (f.name, f.path))

    def _scan_directory(self, directory: Path, files: list[JsonFileInfo], recursive: bool) -> None:
        # symlinked entries are skipped, so link cycles cannot recurse
        with os.scandir(directory) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                if entry.is_dir(follow_symlinks=False):
                    if recursive:
                        self._scan_directory(Path(entry.path), files, recursive)
                elif entry.is_file(follow_symlinks=False) and is_json_file_name(entry.name):
                    files.append(self.analyze_file(Path(entry.path)))

    def analyze_file(self, path: Path) -> JsonFileInfo:
        """Cheap structural classification of one file."""
        path = path.absolute()
        try:
            size = path.stat().st_size
        except OSError as exc:
            return JsonFileInfo(name=path.name, path=str(path), size=0, error=str(exc))

        info = JsonFileInfo(name=path.name, path=str(path), size=size)
        try:
            data = decode_json(read_text(path), source=str(path))
        except ClaimsTimelineError as exc:
            info.error = str(exc)
            return info

        check = classify_structure(data, self.config)
        if check.is_valid:
            info.is_valid_claims = True
            info.claims_count = check.claims_count
            info.claim_kinds = check.kinds
        else:
            info.error = check.error
        return info

    # ── Process ──────────────────────────────────────────────────────────

    def process_folder(
        self,
        folder: str | Path,
        options: FolderProcessingOptions | None = None,
    ) -> BatchResult:
        """
        Normalize and render every valid claims file under *folder*.
        Raises FolderScanError or NoValidFilesError; per-file failures are collected.
        """
        options = options or FolderProcessingOptions()
        output_dir = Path(options.output_dir) if options.output_dir else Path(folder)

        files = self.scan_folder(folder, options.recursive)
        valid_files = [f for f in files if f.is_valid_claims]
        if not valid_files:
            raise NoValidFilesError(f"No valid medical claims JSON files found in {folder}")

        result = BatchResult(files_scanned=len(files))
        logger.info(f"Processing {len(valid_files)} of {len(files)} JSON files from {folder}")

        # output path -> input path that produced it in this batch
        written: dict[Path, str] = {}
        for file_info in valid_files:
            try:
                out_path, doc = self._process_file(file_info, output_dir, options.render, written)
            except Exception as exc:
                self._record_failure(result, file_info, str(exc) or type(exc).__name__)
                continue

            written[out_path] = file_info.path
            result.files_succeeded += 1
            result.output_files.append(str(out_path))
            self._fold_summary(result, doc)

        logger.info(
            f"Batch complete: {result.files_succeeded} succeeded, {result.files_failed} failed"
        )
        return result

    def _process_file(
        self,
        file_info: JsonFileInfo,
        output_dir: Path,
        render: RenderOptions,
        written: dict[Path, str],
    ) -> tuple[Path, TimelineDocument]:
        logger.info(f"Processing: {file_info.name}...")
        out_path = batch_output_path(file_info.name, output_dir)
        if out_path in written:
            logger.warning(f"Output name collision: {file_info.path} and {written[out_path]} both map to {out_path}")
            raise FileIOError(f"Output file {out_path.name} was already written for {written[out_path]}")
        doc = normalize_buffer(read_text(file_info.path), self.config, source=file_info.path)
        title = render.title or f"{DEFAULT_TITLE} - {file_info.name}"
        html_text = self.renderer(doc, render.model_copy(update={"title": title}))
        write_text(out_path, html_text)
        return out_path, doc

    @staticmethod
    def _record_failure(result: BatchResult, file_info: JsonFileInfo, message: str) -> None:
        logger.error(f"Failed to process {file_info.name}: {message}")
        result.files_failed += 1
        result.errors.append(FileError(file=file_info.name, error=message))

    @staticmethod
    def _fold_summary(result: BatchResult, doc: TimelineDocument) -> None:
        summary = result.summary
        summary.total_items += doc.summary.total_items
        for kind in doc.summary.kinds:
            if kind not in summary.kinds:
                summary.kinds.append(kind)
        summary.span = doc.span if summary.span is None else summary.span.union(doc.span)
