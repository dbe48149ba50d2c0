import pytest

from erlangcalc.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test reads settings from its own environment."""
    monkeypatch.delenv("ERLANGCALC_SEARCH_HEADROOM", raising=False)
    monkeypatch.delenv("ERLANGCALC_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def interval_df():
    import pandas as pd

    return pd.DataFrame(
        {
            "interval_start": ["2024-01-01 09:00:00", "2024-01-01 09:15:00", "2024-01-01 09:30:00"],
            "interval_minutes": [15, 15, 15],
            "volume": [50, 120, 80],
            "aht_seconds": [300, 300, 300],
            "is_open": [True, True, False],
        }
    )
