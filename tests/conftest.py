"""
Pytest configuration and shared fixtures for streak analyzer tests.
"""

import sys
from pathlib import Path

import pytest
import numpy as np

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Send structured event logs to a temp dir instead of ./logs."""
    import core.structured_log as slog

    logs_dir = tmp_path / "logs"
    monkeypatch.setattr(slog, "LOG_DIR", logs_dir)
    monkeypatch.setattr(slog, "LOG_FILE", logs_dir / "events.jsonl")
    monkeypatch.setattr(slog, "_file_handler", None)
    yield logs_dir
    if slog._file_handler is not None:
        slog._file_handler.close()


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Every test starts from config/base.yaml."""
    from config import settings_loader

    monkeypatch.delenv("STREAKS_CONFIG_PATH", raising=False)
    settings_loader.load_settings(force_reload=True)
    yield
    settings_loader.load_settings(force_reload=True)


@pytest.fixture
def sample_rows():
    """
    Ten OHLC rows. Row 3 has an unparsable open, so its pct_change is None
    and the change series skips it.
    """
    opens = ["100", "101", "103", "bad", "104", "102", "100", "99", "100", "102"]
    closes = ["101", "103", "104", "104.5", "102", "100", "99", "100", "102", "103"]
    return [
        {
            "Date": f"2024-01-{i + 1:02d}",
            "Open": o,
            "Close": c,
            "Volume": str(1000 + 10 * i),
        }
        for i, (o, c) in enumerate(zip(opens, closes))
    ]


@pytest.fixture
def sample_columns():
    return ["Date", "Open", "Close", "Volume"]


@pytest.fixture
def sample_csv(tmp_path, sample_rows, sample_columns):
    """Write sample_rows to a CSV file (with a blank line in the middle)."""
    lines = [",".join(sample_columns)]
    for i, row in enumerate(sample_rows):
        lines.append(",".join(row[c] for c in sample_columns))
        if i == 4:
            lines.append("")
    path = tmp_path / "prices.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def random_walk_prices():
    """Random-walk close prices with daily pct changes, seeded."""
    np.random.seed(42)
    changes = np.random.randn(250) * 1.5
    prices = 100 * np.cumprod(1 + changes / 100)
    return changes.tolist(), prices.tolist()
