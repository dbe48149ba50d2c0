import pandas as pd
import pytest

from erlangcalc.errors import InvalidInput
from erlangcalc.monte_carlo import MAX_TOTAL_SIMS, MonteCarloConfig, run_interval_monte_carlo


def _df():
    return pd.DataFrame(
        {
            "interval_start": ["2024-01-01 09:00:00", "2024-01-01 09:15:00", "2024-01-01 09:30:00"],
            "interval_minutes": [15, 15, 15],
            "volume": [50, 60, 40],
            "aht_seconds": [300, 300, 300],
            "is_open": [True, True, False],
        }
    )


def _run(cfg, **kwargs):
    params = dict(
        simulate_volume=True,
        simulate_aht=False,
        target_type="service_level",
        service_level_target=0.80,
        service_level_time_seconds=60,
        asa_target_seconds=30,
        shrinkage=0.30,
        occupancy_target=0.90,
    )
    params.update(kwargs)
    return run_interval_monte_carlo(interval_df=_df(), cfg=cfg, **params)


def test_monte_carlo_runs_small():
    cfg = MonteCarloConfig(n_sims=200, seed=1, volume_dist="poisson", volume_cv=0.15, aht_dist="lognormal", aht_cv=0.10)
    out = _run(cfg)

    assert "scheduled_p90" in out.columns
    assert len(out) == 3

    open_rows = out.iloc[:2]
    assert (open_rows["scheduled_p50"] <= open_rows["scheduled_p90"]).all()
    assert (open_rows["scheduled_p90"] <= open_rows["scheduled_p95"]).all()
    assert (open_rows["scheduled_mean"] >= open_rows["on_phone_mean"]).all()

    closed = out.iloc[2]
    assert closed["scheduled_mean"] == 0.0
    assert closed["on_phone_p95"] == 0.0


def test_monte_carlo_is_reproducible():
    cfg = MonteCarloConfig(n_sims=50, seed=7, volume_dist="lognormal", aht_dist="normal")
    first = _run(cfg, simulate_aht=True)
    second = _run(cfg, simulate_aht=True)
    pd.testing.assert_frame_equal(first, second)


def test_monte_carlo_without_randomness_is_deterministic_staffing():
    cfg = MonteCarloConfig(n_sims=5, seed=3)
    out = _run(cfg, simulate_volume=False, simulate_aht=False)
    assert out.loc[0, "on_phone_p50"] == out.loc[0, "on_phone_p95"] == out.loc[0, "on_phone_mean"]


def test_monte_carlo_asa_target():
    cfg = MonteCarloConfig(n_sims=30, seed=11, volume_dist="normal")
    out = _run(cfg, target_type="asa", asa_target_seconds=20, occupancy_target=None)
    assert (out.loc[:1, "asa_mean"] <= 20).all()


def test_monte_carlo_limits():
    with pytest.raises(InvalidInput):
        _run(MonteCarloConfig(n_sims=0))
    with pytest.raises(InvalidInput, match="MAX_TOTAL_SIMS"):
        _run(MonteCarloConfig(n_sims=MAX_TOTAL_SIMS // 3 + 1))


def test_monte_carlo_unknown_distribution():
    with pytest.raises(InvalidInput):
        _run(MonteCarloConfig(n_sims=5, volume_dist="uniform"))
