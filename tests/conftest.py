"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture(autouse=True)
def temp_config_dir(tmp_path, monkeypatch):
    """Keep configuration reads and writes inside a temporary directory."""
    config_dir = tmp_path / ".ehour-sync"
    monkeypatch.setattr("ehour_sync.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("ehour_sync.config.CONFIG_FILE", config_dir / "config.json")
    return config_dir


@pytest.fixture
def sample_git_log():
    """Sample git log in `DATE: message` form."""
    return "\n".join([
        "2025-07-02: MKIS-101 Update profile page - fix avatar upload",
        "2025-07-01: MKIS-100 Add login - validate fields",
        "2025-07-01: Merge branch 'feature/login' into develop",
        "2025-07-01: MKIS-100 Add login - fix redirect",
        "2025-07-01: Bump dependencies",
        "not a commit line",
        "2025-07-02: MKIS-099: Cleanup build scripts",
        "2025-07-03: Merge remote-tracking branch 'origin/main'",
        "2025-07-03: Tweak CI cache",
    ])


@pytest.fixture
def sample_report():
    """Sample daily report text."""
    return "\n".join([
        "## 2025-07-01",
        "[8] MKIS-100: Add login",
        "  - validate fields",
        "  - fix redirect",
        "MKIS-101 Update profile page",
        "  - fix avatar upload",
        "",
        "## 2025-07-02",
        "[6] General work",
        "  - Bump dependencies",
        "",
        "## 2025-07-03",
        "[5] MKIS-42: Fix bug",
        "  - add test",
        "",
    ])
