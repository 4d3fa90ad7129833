"""Price/volume history models."""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_FILL = Decimal("1")


def _to_decimal(value) -> Decimal | None:
    """Convert a raw sample to Decimal, or None if it is unusable."""
    if value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def sanitize_values(values: Iterable) -> list[Decimal]:
    """
    Replace missing, non-finite or non-positive samples.

    Each bad sample is replaced with the last known-good value, or with
    ``1`` when no good value has been seen yet.
    """
    result: list[Decimal] = []
    last_valid: Decimal | None = None

    for raw in values:
        value = _to_decimal(raw)
        if value is None or value <= 0:
            result.append(last_valid if last_valid is not None else DEFAULT_FILL)
        else:
            result.append(value)
            last_valid = value

    return result


class PriceSeries(BaseModel):
    """OHLCV history for one instrument (parallel arrays, most recent last)."""

    model_config = ConfigDict(frozen=True)

    closes: tuple[Decimal, ...]
    highs: tuple[Decimal, ...]
    lows: tuple[Decimal, ...]
    volumes: tuple[Decimal, ...]
    current: Decimal = Field(gt=0)
    previous_close: Decimal = Field(gt=0)
    symbol: str | None = None

    @model_validator(mode="after")
    def _check_lengths(self) -> "PriceSeries":
        lengths = {len(self.closes), len(self.highs), len(self.lows), len(self.volumes)}
        if len(lengths) != 1:
            raise ValueError(
                "closes, highs, lows and volumes must have the same length "
                f"(got {len(self.closes)}, {len(self.highs)}, "
                f"{len(self.lows)}, {len(self.volumes)})"
            )
        return self

    @classmethod
    def from_raw(
        cls,
        closes: Iterable,
        highs: Iterable,
        lows: Iterable,
        volumes: Iterable,
        current=None,
        previous_close=None,
        symbol: str | None = None,
        max_size: int | None = None,
    ) -> "PriceSeries":
        """Build a series from unsanitized provider data.

        ``current`` defaults to the last close and ``previous_close`` to the
        close before it (or the last close when only one bar exists).
        """
        clean_closes = sanitize_values(closes)
        clean_highs = sanitize_values(highs)
        clean_lows = sanitize_values(lows)
        clean_volumes = sanitize_values(volumes)

        if max_size is not None:
            clean_closes = clean_closes[-max_size:]
            clean_highs = clean_highs[-max_size:]
            clean_lows = clean_lows[-max_size:]
            clean_volumes = clean_volumes[-max_size:]

        if current is None:
            current = clean_closes[-1] if clean_closes else DEFAULT_FILL
        if previous_close is None:
            if len(clean_closes) >= 2:
                previous_close = clean_closes[-2]
            else:
                previous_close = current

        return cls(
            closes=clean_closes,
            highs=clean_highs,
            lows=clean_lows,
            volumes=clean_volumes,
            current=current,
            previous_close=previous_close,
            symbol=symbol,
        )

    @property
    def change_percent(self) -> Decimal:
        """Percentage change of ``current`` versus ``previous_close``."""
        return (self.current - self.previous_close) / self.previous_close * 100

    def __len__(self) -> int:
        return len(self.closes)
