"""Tests for trade lifecycle transitions."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from smc_engine.lifecycle import evaluate_end_of_day, update_signal
from smc_engine.models import Direction, Reason, Signal, SignalStatus, TradeRecord


NOW = datetime(2024, 1, 2, 15, 30, tzinfo=timezone.utc)


def create_signal(direction: Direction = Direction.BUY, **overrides) -> Signal:
    """Helper to create a signal around an entry of 100."""
    if direction == Direction.BUY:
        defaults = dict(
            stoploss=Decimal("95"),
            targets=(Decimal("105"), Decimal("110"), Decimal("115")),
            reasons=(Reason.BULLISH_TREND,),
        )
    elif direction == Direction.SELL:
        defaults = dict(
            stoploss=Decimal("105"),
            targets=(Decimal("95"), Decimal("90"), Decimal("85")),
            reasons=(Reason.BEARISH_TREND,),
        )
    else:
        defaults = dict(
            stoploss=Decimal("100"),
            targets=(Decimal("100"),),
            reasons=(Reason.NEUTRAL,),
        )
    defaults.update(
        direction=direction,
        confidence=50 if direction == Direction.HOLD else 80,
        entry_price=Decimal("100"),
    )
    defaults.update(overrides)
    return Signal(**defaults)


class TestUpdateSignal:
    """Live-tick resolution."""

    def test_buy_stop_hit(self):
        signal = create_signal()
        updated = update_signal(signal, Decimal("94"), now=NOW)

        assert updated.status == SignalStatus.STOP_HIT
        assert updated.resolved is True
        assert updated.resolved_at == NOW
        assert updated.final_price == Decimal("94")
        assert updated.explanation == "Stoploss hit — trade invalidated."

    def test_buy_stop_at_level(self):
        updated = update_signal(create_signal(), Decimal("95"))
        assert updated.status == SignalStatus.STOP_HIT

    def test_buy_target_hit(self):
        updated = update_signal(create_signal(), Decimal("105"), now=NOW)

        assert updated.status == SignalStatus.TARGET_HIT
        assert updated.final_price == Decimal("105")
        assert updated.reasons == (Reason.TARGET_REACHED,)
        assert updated.explanation == "Target reached — take profits."

    def test_sell_stop_hit(self):
        updated = update_signal(create_signal(Direction.SELL), Decimal("105"))
        assert updated.status == SignalStatus.STOP_HIT

    def test_sell_target_hit(self):
        updated = update_signal(create_signal(Direction.SELL), Decimal("94"))

        assert updated.status == SignalStatus.TARGET_HIT
        assert updated.final_price == Decimal("94")

    def test_no_breach_returns_same_object(self):
        signal = create_signal()
        assert update_signal(signal, Decimal("101")) is signal

    def test_hold_never_resolves(self):
        signal = create_signal(Direction.HOLD)

        assert update_signal(signal, Decimal("1")) is signal
        assert update_signal(signal, Decimal("1000")) is signal

    def test_resolved_is_idempotent(self):
        resolved = update_signal(create_signal(), Decimal("105"), now=NOW)

        assert update_signal(resolved, Decimal("50")) is resolved

    def test_original_untouched(self):
        signal = create_signal()
        update_signal(signal, Decimal("94"))

        assert signal.status == SignalStatus.ACTIVE
        assert signal.resolved is False

    def test_resolved_at_defaults_to_utc_now(self):
        updated = update_signal(create_signal(), Decimal("94"))

        assert updated.resolved_at is not None
        assert updated.resolved_at.tzinfo is not None

    def test_accepts_plain_numbers(self):
        updated = update_signal(create_signal(), 94.5)
        assert updated.final_price == Decimal("94.5")

    def test_preserves_trade_record_type(self):
        record = TradeRecord.from_signal(create_signal(), "AAPL")
        updated = update_signal(record, Decimal("94"))

        assert isinstance(updated, TradeRecord)
        assert updated.symbol == "AAPL"
        assert updated.structure == record.structure


class TestEvaluateEndOfDay:
    """Session high/low resolution recording the close."""

    def test_buy_stop_wins_when_both_breached(self):
        updated = evaluate_end_of_day(
            create_signal(), Decimal("106"), Decimal("94"), Decimal("100"), now=NOW
        )

        assert updated.status == SignalStatus.STOP_HIT
        assert updated.final_price == Decimal("100")
        assert updated.explanation == "Stoploss hit intraday."

    def test_buy_target(self):
        updated = evaluate_end_of_day(
            create_signal(), Decimal("106"), Decimal("96"), Decimal("104")
        )

        assert updated.status == SignalStatus.TARGET_HIT
        assert updated.final_price == Decimal("104")
        assert updated.reasons == (Reason.TARGET_REACHED_EOD,)
        assert updated.explanation == "Target reached."

    def test_sell_stop(self):
        updated = evaluate_end_of_day(
            create_signal(Direction.SELL), Decimal("106"), Decimal("94"), Decimal("99")
        )

        assert updated.status == SignalStatus.STOP_HIT
        assert updated.final_price == Decimal("99")

    def test_sell_target(self):
        updated = evaluate_end_of_day(
            create_signal(Direction.SELL), Decimal("104"), Decimal("94"), Decimal("96")
        )

        assert updated.status == SignalStatus.TARGET_HIT

    def test_no_breach_stays_active(self):
        signal = create_signal()
        updated = evaluate_end_of_day(signal, Decimal("104"), Decimal("96"), Decimal("101"))

        assert updated is signal
        assert updated.status == SignalStatus.ACTIVE
        assert updated.resolved is False

    def test_resolved_is_idempotent(self):
        resolved = evaluate_end_of_day(
            create_signal(), Decimal("106"), Decimal("96"), Decimal("104")
        )
        assert evaluate_end_of_day(
            resolved, Decimal("200"), Decimal("1"), Decimal("50")
        ) is resolved

    @pytest.mark.parametrize("direction", [Direction.BUY, Direction.SELL])
    def test_intraday_sweep_counts_even_if_close_recovers(self, direction):
        signal = create_signal(direction)
        updated = evaluate_end_of_day(signal, Decimal("120"), Decimal("80"), Decimal("100"))

        assert updated.status == SignalStatus.STOP_HIT

    def test_hold_never_resolves(self):
        signal = create_signal(Direction.HOLD)
        assert evaluate_end_of_day(
            signal, Decimal("200"), Decimal("1"), Decimal("100")
        ) is signal
