"""Tests for the bulk import pipeline."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from launcher.core.importer import BulkImporter, ImportReport, ImportStatus
from launcher.data.game_library import GameLibrary
from launcher.errors import PersistenceError
from launcher.models.game_entry import NIL_ID, GameEntry


@pytest.fixture
def library(tmp_path: Path) -> GameLibrary:
    return GameLibrary(tmp_path / "data")


@pytest.fixture
def importer(library: GameLibrary) -> BulkImporter:
    return BulkImporter(library)


@pytest.fixture
def paths(tmp_path: Path) -> list[Path]:
    return [tmp_path / "games" / name for name in ("Alpha.exe", "Beta.exe", "Gamma.exe")]


def accept(entry: GameEntry) -> GameEntry:
    return entry


class TestDefaults:
    def test_default_entry_from_path(self, importer: BulkImporter, tmp_path: Path) -> None:
        seen: list[GameEntry] = []

        def capture(entry: GameEntry) -> GameEntry:
            seen.append(entry)
            return entry

        importer.run([tmp_path / "games" / "Half-Life 2.exe"], capture)

        (candidate,) = seen
        assert candidate.display_name == "Half-Life 2"
        assert candidate.start_directory == str(tmp_path / "games")
        assert candidate.executable_path == str(tmp_path / "games" / "Half-Life 2.exe")
        assert candidate.is_identified

    def test_stored_id_is_the_offered_id(self, importer: BulkImporter, library: GameLibrary, paths) -> None:
        offered: list[GameEntry] = []

        def capture(entry: GameEntry) -> GameEntry:
            offered.append(entry)
            return entry

        report = importer.run(paths[:1], capture)
        assert report.results[0].entry.id == offered[0].id
        assert library.find_by_id(offered[0].id).display_name == "Alpha"

    def test_customized_values_are_stored(self, importer: BulkImporter, library: GameLibrary, paths) -> None:
        report = importer.run(paths[:1], lambda e: replace(e, display_name="Custom", id=NIL_ID))
        stored = report.results[0].entry
        assert stored.display_name == "Custom"
        assert stored.is_identified
        assert library.all() == [stored]


class TestFaultIsolation:
    def test_cancelled_item_is_skipped(self, importer: BulkImporter, library: GameLibrary, paths) -> None:
        report = importer.run(paths, lambda e: None if e.display_name == "Beta" else e)

        assert [r.status for r in report.results] == [
            ImportStatus.ADDED,
            ImportStatus.SKIPPED,
            ImportStatus.ADDED,
        ]
        assert [r.path for r in report.results] == [str(p) for p in paths]
        assert [e.display_name for e in library.all()] == ["Alpha", "Gamma"]
        assert len(report.skipped) == 1

    def test_confirm_error_does_not_stop_batch(self, importer: BulkImporter, library: GameLibrary, paths) -> None:
        def flaky(entry: GameEntry) -> GameEntry:
            if entry.display_name == "Alpha":
                raise RuntimeError("dialog crashed")
            return entry

        report = importer.run(paths, flaky)

        assert [r.status for r in report.results] == [
            ImportStatus.FAILED,
            ImportStatus.ADDED,
            ImportStatus.ADDED,
        ]
        assert isinstance(report.failed[0].error, RuntimeError)
        assert [e.display_name for e in library.all()] == ["Beta", "Gamma"]

    def test_persistence_error_recorded_per_item(self, library: GameLibrary, paths, monkeypatch) -> None:
        real_add = library.add

        def add(entry: GameEntry) -> GameEntry:
            if entry.display_name == "Gamma":
                raise PersistenceError("disk full")
            return real_add(entry)

        monkeypatch.setattr(library, "add", add)
        report = BulkImporter(library).run(paths, accept)

        assert len(report.added) == 2
        assert isinstance(report.failed[0].error, PersistenceError)
        assert report.failed[0].path == str(paths[2])

    def test_empty_batch(self, importer: BulkImporter) -> None:
        report = importer.run([], accept)
        assert len(report) == 0


class TestBatch:
    def test_ids_unique_across_batch(self, importer: BulkImporter, library: GameLibrary, paths) -> None:
        importer.run(paths + paths, accept)
        ids = [e.id for e in library.all()]
        assert len(ids) == 6
        assert len(set(ids)) == 6

    def test_icons_loaded_for_added_entries(self, library: GameLibrary, paths) -> None:
        icon_cache = MagicMock()
        report = BulkImporter(library, icon_cache=icon_cache).run(paths, lambda e: None if e.display_name == "Beta" else e)

        loaded = [c.args[0] for c in icon_cache.get_or_load.call_args_list]
        assert loaded == [r.entry for r in report.added]

    def test_progress_reported(self, importer: BulkImporter, paths) -> None:
        progress = MagicMock()
        importer.run(paths, accept, on_progress=progress)
        assert [c.args for c in progress.call_args_list] == [(1, 3), (2, 3), (3, 3)]

    def test_add_one(self, importer: BulkImporter, library: GameLibrary, paths) -> None:
        result = importer.add_one(paths[0], accept)
        assert result.status == ImportStatus.ADDED
        assert library.count == 1

    def test_partial_report_survives_interruption(self, importer: BulkImporter, library: GameLibrary, paths) -> None:
        report = ImportReport()

        def progress(done: int, total: int) -> None:
            if done == 2:
                raise RuntimeError("interrupted")

        with pytest.raises(RuntimeError):
            importer.run(paths, accept, on_progress=progress, report=report)

        assert len(report.added) == 2
        assert [r.entry for r in report.added] == library.all()
