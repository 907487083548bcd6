"""Unit tests for InstalledAppRegistry."""

from unittest.mock import MagicMock

from macclean.residue.registry import InstalledAppRegistry


def _source(name: str, apps: list[str] | None = None, error: Exception | None = None) -> MagicMock:
    source = MagicMock()
    source.name = name
    if error is not None:
        source.list_installed_apps.side_effect = error
    else:
        source.list_installed_apps.return_value = apps or []
    return source


def test_merges_sources_lowercase() -> None:
    """Names from every source are merged and lowercased."""
    registry = InstalledAppRegistry(
        [
            _source("spotlight", ["Safari", "Google Chrome"]),
            _source("homebrew", ["iterm2", " Safari "]),
        ]
    )

    assert registry.build() == frozenset({"safari", "google chrome", "iterm2"})


def test_failing_source_contributes_nothing() -> None:
    """A failing source is skipped and the others still count."""
    registry = InstalledAppRegistry(
        [
            _source("spotlight", error=RuntimeError("mdfind unavailable")),
            _source("homebrew", ["firefox"]),
            _source("pkgutil", error=OSError("boom")),
        ]
    )

    assert registry.build() == frozenset({"firefox"})


def test_blank_names_dropped() -> None:
    """Blank names never enter the set."""
    registry = InstalledAppRegistry([_source("pkgutil", ["", "   ", "Xcode"])])
    assert registry.build() == frozenset({"xcode"})


def test_each_source_queried_once() -> None:
    """Every source is enumerated exactly once per build."""
    sources = [_source("spotlight", ["a"]), _source("homebrew", ["b"])]
    InstalledAppRegistry(sources).build()

    for source in sources:
        source.list_installed_apps.assert_called_once_with()
