"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

from macclean.core.config import ResidualLocation
from macclean.models.orphan import Confidence
from macclean.models.selectable import SelectableItem
from macclean.providers.base import DiskUsageProvider, RemovalError, RemovalProvider


class FakeDiskUsage(DiskUsageProvider):
    """Disk usage provider backed by a name-to-size table."""

    def __init__(self, sizes: dict[str, int] | None = None, default: int = 0) -> None:
        self.sizes = sizes or {}
        self.default = default
        self.measured: list[Path] = []

    def measure(self, path: Path) -> int:
        self.measured.append(path)
        return self.sizes.get(path.name, self.default)


class FakeRemoval(RemovalProvider):
    """Removal provider that records calls and fails on demand."""

    def __init__(self, fail: set[str] | None = None, fail_elevated: set[str] | None = None) -> None:
        self.fail = fail or set()
        self.fail_elevated = fail_elevated or set()
        self.removed: list[str] = []
        self.removed_elevated: list[str] = []

    def remove(self, path: str, recursive: bool = True) -> None:
        if path in self.fail:
            raise RemovalError(f"Operation not permitted: {path}")
        self.removed.append(path)

    def remove_elevated(self, path: str) -> None:
        if path in self.fail_elevated:
            raise RemovalError(f"Operation not permitted: {path}")
        self.removed_elevated.append(path)


@pytest.fixture
def fake_disk_usage() -> FakeDiskUsage:
    """Disk usage provider returning 0 unless configured."""
    return FakeDiskUsage()


@pytest.fixture
def fake_removal() -> FakeRemoval:
    """Removal provider that always succeeds."""
    return FakeRemoval()


@pytest.fixture
def app_support_location() -> ResidualLocation:
    """A HIGH-confidence residual location."""
    return ResidualLocation(
        path="~/Library/Application Support",
        category="App Support",
        confidence_base=Confidence.HIGH,
    )


@pytest.fixture
def preferences_location() -> ResidualLocation:
    """The Preferences location (LOW base)."""
    return ResidualLocation(
        path="~/Library/Preferences",
        category="Preferences",
        confidence_base=Confidence.LOW,
    )


@pytest.fixture
def sample_items() -> list[SelectableItem]:
    """Mixed-confidence items for review tests."""
    return [
        SelectableItem(name="Alpha", path="/Users/me/a", size=300, confidence=Confidence.HIGH),
        SelectableItem(name="Beta", path="/Users/me/b", size=200, confidence=Confidence.MEDIUM),
        SelectableItem(name="Gamma", path="/Users/me/c", size=100, confidence=Confidence.HIGH),
        SelectableItem(name="Delta", path="/Users/me/d", size=50, confidence=Confidence.LOW),
    ]
