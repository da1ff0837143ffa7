"""Tests for entry point resolution: manifest precedence, conventional names, file filter."""

from pathlib import Path

from plughost.extensions.resolver import ENTRY_FILENAMES, resolve


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestResolveDirectory:
    def test_manifest_main_wins_over_conventional(self, tmp_path: Path) -> None:
        plugin = tmp_path / "bar"
        _touch(plugin / "plugin.yaml", "main: entry.py\n")
        entry = _touch(plugin / "entry.py")
        _touch(plugin / "__init__.py")
        _touch(plugin / "main.py")
        assert resolve(plugin) == entry

    def test_manifest_main_in_subdirectory(self, tmp_path: Path) -> None:
        plugin = tmp_path / "bar"
        _touch(plugin / "plugin.yaml", "main: src/run.py\n")
        entry = _touch(plugin / "src" / "run.py")
        assert resolve(plugin) == entry

    def test_manifest_main_missing_falls_back(self, tmp_path: Path) -> None:
        plugin = tmp_path / "bar"
        _touch(plugin / "plugin.yaml", "main: gone.py\n")
        fallback = _touch(plugin / "main.py")
        assert resolve(plugin) == fallback

    def test_manifest_without_main_falls_back(self, tmp_path: Path) -> None:
        plugin = tmp_path / "bar"
        _touch(plugin / "plugin.yaml", "version: 1.0.0\n")
        fallback = _touch(plugin / "__init__.py")
        assert resolve(plugin) == fallback

    def test_malformed_manifest_falls_back(self, tmp_path: Path, caplog) -> None:
        plugin = tmp_path / "bar"
        _touch(plugin / "plugin.yaml", "main: [unclosed\n")
        fallback = _touch(plugin / "plugin.py")
        assert resolve(plugin) == fallback
        assert "Invalid manifest" in caplog.text

    def test_conventional_order(self, tmp_path: Path) -> None:
        plugin = tmp_path / "p"
        for name in ENTRY_FILENAMES:
            _touch(plugin / name)
        assert resolve(plugin) == plugin / ENTRY_FILENAMES[0]
        (plugin / ENTRY_FILENAMES[0]).unlink()
        assert resolve(plugin) == plugin / ENTRY_FILENAMES[1]
        (plugin / ENTRY_FILENAMES[1]).unlink()
        assert resolve(plugin) == plugin / ENTRY_FILENAMES[2]

    def test_no_entry_returns_none(self, tmp_path: Path) -> None:
        plugin = tmp_path / "p"
        _touch(plugin / "README.md", "docs")
        _touch(plugin / "helpers.py")
        assert resolve(plugin) is None

    def test_empty_directory_returns_none(self, tmp_path: Path) -> None:
        plugin = tmp_path / "p"
        plugin.mkdir()
        assert resolve(plugin) is None


class TestResolveFile:
    def test_source_file(self, tmp_path: Path) -> None:
        f = _touch(tmp_path / "foo.py")
        assert resolve(f) == f

    def test_bytecode_file(self, tmp_path: Path) -> None:
        f = _touch(tmp_path / "foo.pyc")
        assert resolve(f) == f

    def test_unrecognized_suffix(self, tmp_path: Path) -> None:
        assert resolve(_touch(tmp_path / "notes.txt")) is None
        assert resolve(_touch(tmp_path / "foo.js")) is None

    def test_missing_path(self, tmp_path: Path) -> None:
        assert resolve(tmp_path / "nope.py") is None
