import pandas as pd
import pytest

from erlangcalc.errors import InvalidInput
from erlangcalc.validation import normalize_interval_df, parse_is_open, validate_interval_df, validate_intervals


def test_validate_intervals_flags_expected_columns():
    df = pd.DataFrame(
        {
            "interval_start": ["2026-01-26 09:00:00", "2026-01-26 09:15:00", "2026-01-26 09:30:00"],
            "interval_minutes": [15, 15, 0],
            "volume": [10.0, -1.0, 0.0],
            "aht_seconds": [300.0, 0.0, 300.0],
            "is_open": [True, True, True],
        }
    )

    out = validate_intervals(df)

    assert len(out) == 3

    # row 0: ok volume, ok aht, open with volume
    assert not out.loc[0, "flag_volume_negative"]
    assert not out.loc[0, "flag_aht_nonpositive"]
    assert not out.loc[0, "flag_interval_nonpositive"]
    assert not out.loc[0, "flag_open_with_zero_volume"]
    assert not out.loc[0, "has_issue"]

    # row 1: negative volume + nonpositive AHT should flag
    assert out.loc[1, "flag_volume_negative"]
    assert out.loc[1, "flag_aht_nonpositive"]
    assert out.loc[1, "has_issue"]

    # row 2: zero-length interval, open with nothing offered
    assert out.loc[2, "flag_interval_nonpositive"]
    assert out.loc[2, "flag_open_with_zero_volume"]


def test_validate_intervals_does_not_mutate_input(interval_df):
    before = list(interval_df.columns)
    validate_intervals(interval_df)
    assert list(interval_df.columns) == before


def test_validate_interval_df_accepts_good_frame(interval_df):
    validate_interval_df(interval_df)


def test_validate_interval_df_missing_columns(interval_df):
    with pytest.raises(InvalidInput, match="missing required columns"):
        validate_interval_df(interval_df.drop(columns=["aht_seconds"]))


def test_validate_interval_df_empty(interval_df):
    with pytest.raises(InvalidInput, match="empty"):
        validate_interval_df(interval_df.iloc[0:0])


def test_validate_interval_df_bad_values(interval_df):
    bad = interval_df.copy()
    bad.loc[1, "interval_minutes"] = 0
    with pytest.raises(InvalidInput):
        validate_interval_df(bad)

    bad = interval_df.copy()
    bad["interval_start"] = ["2024-01-01 09:00:00", "not a time", "2024-01-01 09:30:00"]
    with pytest.raises(InvalidInput, match="invalid timestamps"):
        validate_interval_df(bad)

    bad = interval_df.copy()
    bad["volume"] = ["50", "lots", "80"]
    with pytest.raises(InvalidInput, match="volume"):
        validate_interval_df(bad)


def test_parse_is_open_handles_each_dtype():
    assert parse_is_open(pd.Series([True, False])).tolist() == [True, False]
    assert parse_is_open(pd.Series([1, 0, 2])).tolist() == [True, False, True]
    assert parse_is_open(pd.Series([1.0, None])).tolist() == [True, False]
    assert parse_is_open(pd.Series(["Yes", "no", "FALSE", "t", None])).tolist() == [True, False, False, True, False]
    assert parse_is_open(pd.Series(["1", "0"], dtype="string")).tolist() == [True, False]


def test_validate_intervals_reads_string_flags():
    df = pd.DataFrame(
        {
            "interval_start": ["2026-01-26 09:00:00", "2026-01-26 09:15:00"],
            "interval_minutes": [15, 15],
            "volume": [0.0, 0.0],
            "aht_seconds": [300.0, 300.0],
            "is_open": ["no", "yes"],
        }
    )
    out = validate_intervals(df)
    assert not out.loc[0, "flag_open_with_zero_volume"]
    assert out.loc[1, "flag_open_with_zero_volume"]


def test_normalize_interval_df_types(interval_df):
    df = interval_df.copy()
    df["interval_minutes"] = [15, 7.5, 30]
    df["is_open"] = ["y", "n", "1"]
    out = normalize_interval_df(df)

    assert out["interval_minutes"].tolist() == [15.0, 7.5, 30.0]
    assert out["is_open"].tolist() == [True, False, True]
    assert pd.api.types.is_datetime64_any_dtype(out["interval_start"])
