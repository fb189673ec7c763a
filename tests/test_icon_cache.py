"""Tests for the icon cache (probes replaced by plain callables, no Qt needed)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock
from uuid import UUID

import pytest

from launcher.core.icon_cache import IconCache
from launcher.models.game_entry import GameEntry

GAME_ID = UUID("12345678-1234-4234-8234-123456789abc")
GENERIC = "generic"


@pytest.fixture
def decoder() -> MagicMock:
    return MagicMock(side_effect=lambda path: f"decoded:{Path(path).name}")


@pytest.fixture
def extractor() -> MagicMock:
    return MagicMock(side_effect=lambda path: f"extracted:{Path(path).name}")


@pytest.fixture
def cache(decoder: MagicMock, extractor: MagicMock) -> IconCache:
    return IconCache(decoder, extractor, lambda: GENERIC)


@pytest.fixture
def game_files(tmp_path: Path) -> dict[str, Path]:
    files = {
        "exe": tmp_path / "game.exe",
        "icon_a": tmp_path / "a.png",
        "icon_b": tmp_path / "b.png",
    }
    for path in files.values():
        path.write_bytes(b"\x00")
    return files


def _entry(exe: Path | str = "", icon: Path | str = "") -> GameEntry:
    return GameEntry(display_name="Game", executable_path=str(exe), custom_icon_path=str(icon), id=GAME_ID)


class TestLookupOrder:
    def test_custom_icon_first(self, cache: IconCache, game_files, extractor: MagicMock) -> None:
        image = cache.get_or_load(_entry(game_files["exe"], game_files["icon_a"]))
        assert image == "decoded:a.png"
        extractor.assert_not_called()

    def test_executable_icon_without_custom(self, cache: IconCache, game_files) -> None:
        assert cache.get_or_load(_entry(game_files["exe"])) == "extracted:game.exe"

    def test_missing_custom_icon_uses_generic(self, cache: IconCache, game_files, extractor: MagicMock) -> None:
        image = cache.get_or_load(_entry(game_files["exe"], "/nowhere/icon.png"))
        assert image == GENERIC
        extractor.assert_not_called()

    def test_undecodable_custom_icon_uses_generic(self, game_files, extractor: MagicMock) -> None:
        cache = IconCache(MagicMock(return_value=None), extractor, lambda: GENERIC)
        assert cache.get_or_load(_entry(game_files["exe"], game_files["icon_a"])) == GENERIC

    def test_missing_executable_uses_generic(self, cache: IconCache, extractor: MagicMock) -> None:
        assert cache.get_or_load(_entry("/nowhere/game.exe")) == GENERIC
        extractor.assert_not_called()


class TestFailSoft:
    def test_probe_exceptions_are_absorbed(self, game_files) -> None:
        boom = MagicMock(side_effect=OSError("bad file"))
        cache = IconCache(boom, boom, lambda: GENERIC)
        assert cache.get_or_load(_entry(game_files["exe"], game_files["icon_a"])) == GENERIC
        assert cache.get_or_load(_entry(game_files["exe"]).with_id(UUID(int=7))) == GENERIC

    def test_null_image_counts_as_failure(self, game_files) -> None:
        null_image = MagicMock()
        null_image.isNull.return_value = True
        cache = IconCache(MagicMock(), MagicMock(return_value=null_image), lambda: GENERIC)
        assert cache.get_or_load(_entry(game_files["exe"])) == GENERIC

    def test_both_paths_invalid(self, cache: IconCache) -> None:
        assert cache.get_or_load(_entry("/bad/exe", "/bad/icon.png")) == GENERIC

    def test_invalid_path_string(self, cache: IconCache) -> None:
        assert cache.get_or_load(_entry("bad\x00path")) == GENERIC

    def test_broken_fallback_still_returns_image(self) -> None:
        def broken() -> str:
            raise RuntimeError("no icon theme")

        cache = IconCache(MagicMock(), MagicMock(), broken)
        assert cache.get_or_load(_entry()) is not None


class TestCaching:
    def test_second_lookup_skips_filesystem(self, cache: IconCache, game_files, decoder: MagicMock) -> None:
        entry = _entry(game_files["exe"], game_files["icon_a"])
        cache.get_or_load(entry)
        game_files["icon_a"].unlink()

        assert cache.get_or_load(entry) == "decoded:a.png"
        decoder.assert_called_once()

    def test_one_image_per_id(self, cache: IconCache, game_files) -> None:
        cache.get_or_load(_entry(game_files["exe"]))
        cache.get_or_load(_entry(game_files["exe"], game_files["icon_a"]), dirty=True)
        assert len(cache) == 1

    def test_invalidate_then_reload_reflects_new_icon(self, cache: IconCache, game_files) -> None:
        cache.get_or_load(_entry(game_files["exe"], game_files["icon_a"]))

        cache.invalidate(GAME_ID)
        assert not cache.contains(GAME_ID)
        assert cache.get_or_load(_entry(game_files["exe"], game_files["icon_b"])) == "decoded:b.png"

    def test_dirty_flag_reloads(self, cache: IconCache, game_files) -> None:
        cache.get_or_load(_entry(game_files["exe"], game_files["icon_a"]))
        image = cache.get_or_load(_entry(game_files["exe"]), dirty=True)
        assert image == "extracted:game.exe"

    def test_stale_image_without_dirty_flag(self, cache: IconCache, game_files) -> None:
        cache.get_or_load(_entry(game_files["exe"], game_files["icon_a"]))
        assert cache.get_or_load(_entry(game_files["exe"])) == "decoded:a.png"

    def test_invalidate_unknown_id(self, cache: IconCache) -> None:
        cache.invalidate(GAME_ID)
        assert len(cache) == 0

    def test_fallback_built_once(self, decoder: MagicMock, extractor: MagicMock) -> None:
        factory = MagicMock(return_value=GENERIC)
        cache = IconCache(decoder, extractor, factory)
        cache.get_or_load(_entry())
        cache.get_or_load(_entry().with_id(UUID(int=9)))
        factory.assert_called_once()

    def test_clear(self, cache: IconCache, game_files) -> None:
        cache.get_or_load(_entry(game_files["exe"]))
        cache.clear()
        assert not cache.contains(GAME_ID)
