"""Business services."""

from signal_app.services.trade_manager import OutcomeCallback, TradeManager

__all__ = ["OutcomeCallback", "TradeManager"]
