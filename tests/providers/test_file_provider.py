"""Tests for FileProvider."""

import asyncio
import json
import os

import pytest

from neo_preferences.core.exceptions import (
    ConfigurationError,
    ProviderError,
    ProviderInitializationError,
)
from neo_preferences.features.providers import FileProvider, FileProviderConfig


class TestJsonFiles:

    @pytest.mark.asyncio
    async def test_loads_existing_file(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"theme": "dark", "fontSize": 14}), encoding="utf-8")
        provider = FileProvider(FileProviderConfig(file_path=path))

        await provider.initialize()

        assert (await provider.get("theme")).value == "dark"
        assert (await provider.get("fontSize")).source == "file"

    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, tmp_path):
        provider = FileProvider(FileProviderConfig(file_path=tmp_path / "missing.json"))

        await provider.initialize()

        assert await provider.get_all() == {}

    @pytest.mark.asyncio
    async def test_set_writes_file(self, tmp_path):
        path = tmp_path / "prefs.json"
        provider = FileProvider(FileProviderConfig(file_path=path))
        await provider.initialize()

        await provider.set("theme", "dark")
        await provider.set("layout", {"sidebar": True})

        assert json.loads(path.read_text(encoding="utf-8")) == {
            "theme": "dark",
            "layout": {"sidebar": True},
        }

    @pytest.mark.asyncio
    async def test_delete_and_clear_rewrite_file(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"a": 1, "b": 2}), encoding="utf-8")
        provider = FileProvider(FileProviderConfig(file_path=path))
        await provider.initialize()

        assert await provider.delete("a") is True
        assert await provider.delete("a") is False
        assert json.loads(path.read_text(encoding="utf-8")) == {"b": 2}

        await provider.clear()
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    @pytest.mark.asyncio
    async def test_failed_write_leaves_state_unchanged(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"a": 1}), encoding="utf-8")
        provider = FileProvider(FileProviderConfig(file_path=path))
        await provider.initialize()
        provider.config.file_path = tmp_path / "missing" / "prefs.json"

        with pytest.raises(ProviderError) as exc_info:
            await provider.set("b", 2)
        assert exc_info.value.operation == "write"
        assert await provider.get("b") is None

        with pytest.raises(ProviderError):
            await provider.delete("a")
        assert (await provider.get("a")).value == 1

        with pytest.raises(ProviderError):
            await provider.clear()
        assert set(await provider.get_all()) == {"a"}

    @pytest.mark.asyncio
    async def test_invalid_json_fails_initialization(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("{broken", encoding="utf-8")
        provider = FileProvider(FileProviderConfig(file_path=path))

        with pytest.raises(ProviderInitializationError) as exc_info:
            await provider.initialize()

        assert isinstance(exc_info.value.original_error, ProviderError)

    @pytest.mark.asyncio
    async def test_reload_picks_up_external_changes(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
        provider = FileProvider(FileProviderConfig(file_path=path))
        await provider.initialize()

        path.write_text(json.dumps({"theme": "light"}), encoding="utf-8")
        await provider.reload()

        assert (await provider.get("theme")).value == "light"

    @pytest.mark.asyncio
    async def test_watcher_reloads_on_change(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
        provider = FileProvider(
            FileProviderConfig(file_path=path, watch_for_changes=True, poll_interval=0.01)
        )
        await provider.initialize()
        assert provider.is_watching

        path.write_text(json.dumps({"theme": "light"}), encoding="utf-8")
        stat = path.stat()
        os.utime(path, (stat.st_atime, stat.st_mtime + 10))

        try:
            for _ in range(100):
                if (await provider.get("theme")).value == "light":
                    break
                await asyncio.sleep(0.01)
        finally:
            await provider.stop_watching()

        assert (await provider.get("theme")).value == "light"
        assert not provider.is_watching


class TestEnvFiles:

    @pytest.mark.asyncio
    async def test_parses_env_format(self, tmp_path):
        path = tmp_path / "prefs.env"
        path.write_text(
            "# comment\n"
            "THEME=dark\n"
            "FONT_SIZE=14\n"
            "RATIO=1.5\n"
            "VERSION=1.10\n"
            "DEBUG=true\n"
            'QUOTED="hello world"\n'
            'LAYOUT={"sidebar": true}\n',
            encoding="utf-8",
        )
        provider = FileProvider(FileProviderConfig(file_path=path))

        await provider.initialize()
        values = {key: metadata.value for key, metadata in (await provider.get_all()).items()}

        assert values == {
            "THEME": "dark",
            "FONT_SIZE": 14,
            "RATIO": 1.5,
            "VERSION": "1.10",
            "DEBUG": True,
            "QUOTED": "hello world",
            "LAYOUT": {"sidebar": True},
        }

    @pytest.mark.asyncio
    async def test_writes_env_format(self, tmp_path):
        path = tmp_path / "settings.txt"
        provider = FileProvider(FileProviderConfig(file_path=path, format="env"))
        await provider.initialize()

        await provider.set("THEME", "dark")
        await provider.set("COUNT", 3)

        assert path.read_text(encoding="utf-8") == "THEME=dark\nCOUNT=3\n"

    def test_format_detection(self, tmp_path):
        assert FileProvider(FileProviderConfig(file_path=tmp_path / ".env")).format == "env"
        assert FileProvider(FileProviderConfig(file_path=tmp_path / "a.json")).format == "json"
        assert FileProvider(FileProviderConfig(file_path=tmp_path / "a.conf")).format == "json"

    def test_unsupported_format_rejected(self, tmp_path):
        with pytest.raises(ConfigurationError):
            FileProviderConfig(file_path=tmp_path / "a.yaml", format="yaml")

    @pytest.mark.asyncio
    async def test_env_values_survive_reload(self, tmp_path):
        path = tmp_path / "prefs.env"
        provider = FileProvider(FileProviderConfig(file_path=path))
        await provider.initialize()
        values = {
            "motto": "dark # night",
            "quote": 'it\'s "fine"',
            "leading": "'quoted'",
            "tags": ["a # b", "c"],
            "multi": "line one\nline two",
            "path": "C:\\temp\\",
            "padded": "  spaced  ",
            "home": "${HOME}/prefs",
        }

        for key, value in values.items():
            await provider.set(key, value)
        await provider.reload()

        assert {key: metadata.value for key, metadata in (await provider.get_all()).items()} == values

    @pytest.mark.asyncio
    async def test_unrepresentable_env_value_is_rejected(self, tmp_path):
        path = tmp_path / "prefs.env"
        provider = FileProvider(FileProviderConfig(file_path=path))
        await provider.initialize()
        await provider.set("theme", "dark")

        with pytest.raises(ProviderError):
            await provider.set("bad", "a # b\\")

        assert await provider.get("bad") is None
        assert path.read_text(encoding="utf-8") == "theme=dark\n"
