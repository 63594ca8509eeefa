"""
Integration tests: folder scan and batch processing on a real temp directory.
"""
from __future__ import annotations

import json
import os
from datetime import date
from pathlib import Path

import pytest

from claims_timeline.shared.errors import FolderScanError, NoValidFilesError
from claims_timeline.shared.models import ClaimKind, FolderProcessingOptions, RenderOptions
from claims_timeline.worker.folder_processor import FolderProcessor

GOOD_RX = {"rxTba": [{"id": "rx1", "dos": "2024-01-01", "dayssupply": 9, "medication": "Drug A"}]}
GOOD_MED = {
    "medHistory": {
        "claims": [{"claimId": "C1", "lines": [{"srvcStart": "2024-01-05", "srvcEnd": "2024-01-20"}]}]
    }
}
BAD_DATES = {"rxTba": [{"dos": "garbage"}]}


def _write(folder: Path, name: str, content) -> Path:
    path = folder / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
    return path


@pytest.fixture
def claims_folder(tmp_path: Path) -> Path:
    folder = tmp_path / "claims"
    _write(folder, "a_rx.json", GOOD_RX)
    _write(folder, "b_med.json", GOOD_MED)
    _write(folder, "c_bad_dates.json", BAD_DATES)
    _write(folder, "d_not_claims.json", {"patient": "Jane"})
    _write(folder, "e_broken.json", "{not json")
    _write(folder, "notes.txt", "ignored")
    return folder


# ── Scan ─────────────────────────────────────────────────────────────────


class TestScanFolder:
    def test_classifies_every_json_file(self, claims_folder):
        files = FolderProcessor().scan_folder(claims_folder)
        assert [f.name for f in files] == [
            "a_rx.json",
            "b_med.json",
            "c_bad_dates.json",
            "d_not_claims.json",
            "e_broken.json",
        ]
        assert [f.is_valid_claims for f in files] == [True, True, True, False, False]

    def test_valid_file_details(self, claims_folder):
        info = FolderProcessor().scan_folder(claims_folder)[1]
        assert info.claims_count == 1
        assert info.claim_kinds == [ClaimKind.MEDICAL_SERVICE]
        assert info.size > 0
        assert Path(info.path).is_absolute()

    def test_invalid_files_carry_errors(self, claims_folder):
        files = {f.name: f for f in FolderProcessor().scan_folder(claims_folder)}
        assert files["d_not_claims.json"].error.startswith("No claims sections found")
        assert "Invalid JSON" in files["e_broken.json"].error

    def test_recursive_and_flat(self, tmp_path):
        _write(tmp_path, "top.json", GOOD_RX)
        _write(tmp_path, "nested/deeper/inner.json", GOOD_MED)
        processor = FolderProcessor()
        assert [f.name for f in processor.scan_folder(tmp_path)] == ["inner.json", "top.json"]
        assert [f.name for f in processor.scan_folder(tmp_path, recursive=False)] == ["top.json"]

    def test_extension_case_insensitive(self, tmp_path):
        _write(tmp_path, "UPPER.JSON", GOOD_RX)
        assert [f.name for f in FolderProcessor().scan_folder(tmp_path)] == ["UPPER.JSON"]

    def test_same_name_ordered_by_path(self, tmp_path):
        _write(tmp_path, "b/claims.json", GOOD_RX)
        _write(tmp_path, "a/claims.json", GOOD_MED)
        files = FolderProcessor().scan_folder(tmp_path)
        assert [Path(f.path).parent.name for f in files] == ["a", "b"]

    def test_symlink_cycle_does_not_abort_scan(self, tmp_path):
        _write(tmp_path, "good.json", GOOD_RX)
        (tmp_path / "sub").mkdir()
        try:
            os.symlink(tmp_path / "sub", tmp_path / "sub" / "loop", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported here")
        files = FolderProcessor().scan_folder(tmp_path)
        assert [f.name for f in files] == ["good.json"]

    def test_symlinked_file_keeps_link_path(self, tmp_path):
        target = _write(tmp_path, "real/target.json", GOOD_RX)
        (tmp_path / "links").mkdir()
        try:
            os.symlink(target, tmp_path / "links" / "alias.json")
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported here")
        info = FolderProcessor().analyze_file(tmp_path / "links" / "alias.json")
        assert info.name == "alias.json"
        assert info.is_valid_claims

    def test_missing_folder(self, tmp_path):
        with pytest.raises(FolderScanError, match="Failed to scan folder"):
            FolderProcessor().scan_folder(tmp_path / "missing")

    def test_file_instead_of_folder(self, tmp_path):
        path = _write(tmp_path, "single.json", GOOD_RX)
        with pytest.raises(FolderScanError):
            FolderProcessor().scan_folder(path)


# ── Process ──────────────────────────────────────────────────────────────


class TestProcessFolder:
    def test_counts_and_isolated_failure(self, claims_folder):
        result = FolderProcessor().process_folder(claims_folder)
        assert result.files_scanned == 5
        assert result.files_succeeded == 2
        assert result.files_failed == 1
        assert len(result.errors) == 1
        assert result.errors[0].file == "c_bad_dates.json"
        assert "No valid claims found" in result.errors[0].error

    def test_outputs_written_beside_inputs_by_default(self, claims_folder):
        result = FolderProcessor().process_folder(claims_folder)
        assert [Path(p).name for p in result.output_files] == [
            "a_rx-timeline.html",
            "b_med-timeline.html",
        ]
        page = (claims_folder / "a_rx-timeline.html").read_text(encoding="utf-8")
        assert "Medical Claims Timeline - a_rx.json" in page

    def test_aggregate_summary(self, claims_folder):
        summary = FolderProcessor().process_folder(claims_folder).summary
        assert summary.total_items == 2
        assert summary.kinds == [ClaimKind.PRESCRIPTION_PENDING, ClaimKind.MEDICAL_SERVICE]
        # [Jan 1, Jan 10] widened by [Jan 5, Jan 20]
        assert summary.span.start == date(2024, 1, 1)
        assert summary.span.end == date(2024, 1, 20)

    def test_output_dir_and_title(self, claims_folder, tmp_path):
        out_dir = tmp_path / "out" / "timelines"
        options = FolderProcessingOptions(
            output_dir=str(out_dir),
            render=RenderOptions(title="Batch Review", interactive=False),
        )
        result = FolderProcessor().process_folder(claims_folder, options)
        assert result.files_succeeded == 2
        page = (out_dir / "b_med-timeline.html").read_text(encoding="utf-8")
        assert "<title>Batch Review</title>" in page
        assert "timeline-data" not in page

    def test_renderer_failure_is_isolated(self, claims_folder):
        calls = []

        def flaky_renderer(doc, options):
            calls.append(options.title)
            if len(calls) == 1:
                raise RuntimeError("render exploded")
            return "<html></html>"

        result = FolderProcessor(renderer=flaky_renderer).process_folder(claims_folder)
        assert result.files_failed == 2
        assert result.files_succeeded == 1
        assert result.errors[0].error == "render exploded"
        # the first success seeds the span
        assert result.summary.span.start == date(2024, 1, 5)

    def test_no_valid_files(self, tmp_path):
        _write(tmp_path, "other.json", {"patient": "Jane"})
        with pytest.raises(NoValidFilesError, match="No valid medical claims JSON files found"):
            FolderProcessor().process_folder(tmp_path)

    def test_empty_folder(self, tmp_path):
        with pytest.raises(NoValidFilesError):
            FolderProcessor().process_folder(tmp_path)

    def test_all_files_fail(self, tmp_path):
        _write(tmp_path, "bad.json", BAD_DATES)
        result = FolderProcessor().process_folder(tmp_path)
        assert result.files_failed == 1
        assert result.summary.total_items == 0
        assert result.summary.span is None

    def test_same_output_name_is_not_overwritten(self, tmp_path):
        folder = tmp_path / "in"
        _write(folder, "a/claims.json", GOOD_RX)
        _write(folder, "b/claims.json", GOOD_MED)
        out_dir = tmp_path / "out"
        result = FolderProcessor().process_folder(folder, FolderProcessingOptions(output_dir=str(out_dir)))
        assert result.files_succeeded == 1
        assert result.files_failed == 1
        assert result.output_files == [str(out_dir / "claims-timeline.html")]
        assert "already written" in result.errors[0].error
        # first file in scan order (a/) owns the artifact
        assert "Drug A" in (out_dir / "claims-timeline.html").read_text(encoding="utf-8")
