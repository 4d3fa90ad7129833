"""Tests for SMC structural detectors."""

from decimal import Decimal

from smc_engine.models import PriceSeries
from smc_engine.patterns import (
    Bias,
    PatternSnapshot,
    detect_break_of_structure,
    detect_breaker_block,
    detect_change_of_character,
    detect_fair_value_gap,
    detect_liquidity_sweep,
    detect_mitigation_block,
    detect_order_block,
    detect_patterns,
    detect_volume_surge,
)


def decimals(values) -> list[Decimal]:
    return [Decimal(str(v)) for v in values]


class TestFairValueGap:
    """Gap between high[i] and low[i+2] above 0.5%."""

    def test_gap_detected(self):
        highs = decimals([100, 100, 100])
        lows = decimals([99, 99, 101])  # 1% gap
        assert detect_fair_value_gap(highs, lows) is True

    def test_gap_at_threshold_is_not_a_gap(self):
        highs = decimals([100, 100, 100])
        lows = decimals([99, 99, "100.5"])  # exactly 0.5%
        assert detect_fair_value_gap(highs, lows) is False

    def test_downside_gap_counts(self):
        highs = decimals([100, 100, 100])
        lows = decimals([99, 99, 98])
        assert detect_fair_value_gap(highs, lows) is True

    def test_too_short(self):
        assert detect_fair_value_gap(decimals([100, 100]), decimals([99, 110])) is False


class TestOrderBlock:
    """Last close versus the mean of the last five closes (+/-1%)."""

    def test_bullish(self):
        # avg 102, 110 > 103.02
        assert detect_order_block(decimals([100, 100, 100, 100, 110])) == Bias.BULLISH

    def test_bearish(self):
        # avg 98, 90 < 97.02
        assert detect_order_block(decimals([100, 100, 100, 100, 90])) == Bias.BEARISH

    def test_flat(self):
        assert detect_order_block(decimals([100] * 5)) is None

    def test_too_short(self):
        assert detect_order_block(decimals([100, 100, 100, 120])) is None


class TestVolumeSurge:
    """Latest volume strictly above 1.5x the preceding mean."""

    def test_exact_threshold_is_not_a_surge(self):
        volumes = decimals([100] * 10 + [150])
        assert detect_volume_surge(volumes) is False

    def test_above_threshold(self):
        volumes = decimals([100] * 10 + [151])
        assert detect_volume_surge(volumes) is True

    def test_only_last_ten_preceding_count(self):
        """Old heavy volume outside the lookback does not dampen the surge."""
        volumes = decimals([10000] * 5 + [100] * 10 + [200])
        assert detect_volume_surge(volumes) is True

    def test_minimum_length(self):
        assert detect_volume_surge(decimals([100] * 9 + [1000])) is True
        assert detect_volume_surge(decimals([100] * 8 + [1000])) is False


class TestLiquiditySweep:
    """Failed breakout/breakdown of the range before the last two bars."""

    def test_bearish_sweep_above_range_high(self):
        highs = decimals([10, 10, 10, 10, 12, 10])
        lows = decimals([9] * 6)
        # above range high 10, below second-to-last high 12
        assert detect_liquidity_sweep(highs, lows, Decimal("11")) == Bias.BEARISH

    def test_bullish_sweep_below_range_low(self):
        highs = decimals([10] * 6)
        lows = decimals([9, 9, 9, 9, 7, 9])
        # below range low 9, above second-to-last low 7
        assert detect_liquidity_sweep(highs, lows, Decimal("8")) == Bias.BULLISH

    def test_inside_range(self):
        highs = decimals([10] * 6)
        lows = decimals([9] * 6)
        assert detect_liquidity_sweep(highs, lows, Decimal("9.5")) is None

    def test_clean_breakout_is_not_a_sweep(self):
        highs = decimals([10, 10, 10, 10, 11, 12])
        lows = decimals([9] * 6)
        assert detect_liquidity_sweep(highs, lows, Decimal("13")) is None

    def test_too_short(self):
        highs = decimals([10, 10, 12, 10])
        lows = decimals([9] * 4)
        assert detect_liquidity_sweep(highs, lows, Decimal("11")) is None


class TestBreakOfStructure:
    """Latest high/low versus the bar two positions back (0.2%)."""

    def test_bullish(self):
        highs = decimals([100] * 5 + ["100.3"])
        lows = decimals([99] * 6)
        assert detect_break_of_structure(highs, lows) == Bias.BULLISH

    def test_bearish(self):
        highs = decimals([100] * 6)
        lows = decimals([99] * 5 + ["98.7"])  # 99 * 0.998 = 98.802
        assert detect_break_of_structure(highs, lows) == Bias.BEARISH

    def test_exact_threshold(self):
        highs = decimals([100] * 5 + ["100.2"])
        lows = decimals([99] * 6)
        assert detect_break_of_structure(highs, lows) is None

    def test_too_short(self):
        highs = decimals([100] * 4 + [110])
        lows = decimals([99] * 5)
        assert detect_break_of_structure(highs, lows) is None


class TestChangeOfCharacter:
    """One-sided 0.1% break of the high or low two bars back."""

    def test_bullish(self):
        highs = decimals([100] * 7 + ["100.2"])
        lows = decimals([99] * 8)
        assert detect_change_of_character(highs, lows) == Bias.BULLISH

    def test_bearish(self):
        highs = decimals([100] * 8)
        lows = decimals([99] * 7 + ["98.8"])  # 99 * 0.999 = 98.901
        assert detect_change_of_character(highs, lows) == Bias.BEARISH

    def test_both_sides_broken(self):
        highs = decimals([100] * 7 + ["100.2"])
        lows = decimals([99] * 7 + ["98.8"])
        assert detect_change_of_character(highs, lows) is None

    def test_exact_threshold(self):
        highs = decimals([100] * 7 + ["100.1"])
        lows = decimals([99] * 8)
        assert detect_change_of_character(highs, lows) is None

    def test_too_short(self):
        highs = decimals([100] * 6 + [110])
        lows = decimals([99] * 7)
        assert detect_change_of_character(highs, lows) is None


class TestMitigationBlock:
    """Last close back inside the prior range (closes -6..-3)."""

    def test_bullish(self):
        # prior range 100..110, 103 > 102 and < 110
        closes = decimals([100, 110, 105, 104, 100, 103])
        assert detect_mitigation_block(closes) == Bias.BULLISH

    def test_bearish(self):
        # 101 is not above 102, but is below 107.8 and above 100
        closes = decimals([100, 110, 105, 104, 100, 101])
        assert detect_mitigation_block(closes) == Bias.BEARISH

    def test_outside_range(self):
        closes = decimals([100, 110, 105, 104, 100, 111])
        assert detect_mitigation_block(closes) is None

    def test_only_window_counts(self):
        """The bar before last is not part of the prior range."""
        closes = decimals([100, 110, 105, 104, 200, 103])
        assert detect_mitigation_block(closes) == Bias.BULLISH

    def test_too_short(self):
        assert detect_mitigation_block(decimals([100, 110, 105, 104, 103])) is None


class TestBreakerBlock:
    """Range of the last five closes versus the five before."""

    def test_bullish(self):
        closes = decimals([1, 2, 3, 4, 5, 2, 3, 4, 5, 6])
        assert detect_breaker_block(closes) == Bias.BULLISH

    def test_bearish(self):
        closes = decimals([5, 6, 7, 8, 9, 4, 5, 6, 7, 8])
        assert detect_breaker_block(closes) == Bias.BEARISH

    def test_mixed(self):
        closes = decimals([3, 4, 5, 6, 7, 2, 3, 4, 5, 8])
        assert detect_breaker_block(closes) is None

    def test_too_short(self):
        assert detect_breaker_block(decimals([1, 2, 3, 4, 5, 6, 7, 8, 9])) is None


class TestDetectPatterns:
    """Tests for running every detector over a series."""

    def test_short_series_has_no_signals(self):
        series = PriceSeries(
            closes=[100, 101],
            highs=[101, 102],
            lows=[99, 100],
            volumes=[1000, 1000],
            current=101,
            previous_close=100,
        )
        assert detect_patterns(series) == PatternSnapshot()

    def test_snapshot_matches_individual_detectors(self):
        closes = decimals([100, 96] * 7 + [100] * 5 + [110])
        flat = decimals([100] * 20)
        series = PriceSeries(
            closes=closes,
            highs=flat,
            lows=flat,
            volumes=decimals([1000] * 20),
            current=Decimal("110"),
            previous_close=Decimal("100"),
        )
        snapshot = detect_patterns(series)

        assert snapshot.order_block == Bias.BULLISH
        assert snapshot.breaker_block == Bias.BULLISH
        assert snapshot.mitigation_block is None
        assert snapshot.break_of_structure is None
        assert snapshot.change_of_character is None
        assert snapshot.liquidity_sweep is None
        assert snapshot.fair_value_gap is False
        assert snapshot.volume_surge is False
