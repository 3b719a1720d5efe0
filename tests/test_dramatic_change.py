import math
from unittest import TestCase

import pandas as pd
from pytest import mark

from eightbit_weather.dramatic_change import select_most_dramatic_change, DramaticChange


@mark.parametrize("current", [0, 70, -12.5, 0.3])
@mark.parametrize("horizon", [0, 1, 12, 48])
def test_no_change_returns_current_at_offset_zero(current, horizon):
    assert select_most_dramatic_change(current, [], horizon) == DramaticChange(current, 0)
    assert select_most_dramatic_change(current, [current] * 20, horizon) == DramaticChange(current, 0)


@mark.parametrize("current, series, horizon, expected", [
    (70, [72, 65, 90, 68], 12, (90, 3)),
    (50, [60, 40, 60], 3, (60, 1)),
    (50, [40, 60], 12, (40, 1)),
    (10, [11, 12, 13], 2, (12, 2)),
    (5, [5, 5, 6], 12, (6, 3)),
    (0.1, [0.0, 0.5, 0.2], 12, (0.5, 2)),
], ids=['largest_delta', 'first_wins_tie', 'drop_beats_later_rise_of_same_size', 'horizon_limits_scan',
        'late_change', 'fractional'])
def test_select_most_dramatic_change(current, series, horizon, expected):
    r = select_most_dramatic_change(current, series, horizon)
    assert (r.value, r.hour_offset) == expected


def test_default_horizon_is_twelve_hours():
    series = [50] * 12 + [100]
    assert select_most_dramatic_change(50, series) == (50, 0)
    assert select_most_dramatic_change(50, series, 13) == (100, 13)


class TestSelectMostDramaticChange(TestCase):

    def test_horizon_truncation(self):
        series = [20 + i for i in range(20)]
        series[15] = 500
        r = select_most_dramatic_change(20, series, horizon=12)
        self.assertEqual(r.hour_offset, 12)
        self.assertEqual(r.value, 31)

    def test_negative_horizon_scans_nothing(self):
        self.assertEqual(select_most_dramatic_change(20, [40, 60], horizon=-3), (20, 0))

    def test_offset_never_past_series_length(self):
        r = select_most_dramatic_change(0, [1, 2, 3], horizon=12)
        self.assertEqual(r.hour_offset, 3)

    def test_nan_entries_are_skipped(self):
        r = select_most_dramatic_change(10, [math.nan, 11, math.nan], horizon=12)
        self.assertEqual(r, (11, 2))

    def test_all_nan_series_is_no_change(self):
        self.assertEqual(select_most_dramatic_change(10, [math.nan] * 4), (10, 0))

    def test_accepts_pandas_series(self):
        r = select_most_dramatic_change(70.0, pd.Series([72.0, 65.0, 90.0, 68.0]))
        self.assertEqual(r.value, 90.0)
        self.assertEqual(r.hour_offset, 3)

    def test_accepts_generator(self):
        r = select_most_dramatic_change(0, (x for x in [1, -5, 3]))
        self.assertEqual(r, (-5, 2))
