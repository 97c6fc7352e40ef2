"""Use cases: record formatting and ordered delivery."""

from __future__ import annotations

from .delivery import DeliveryChannel
from .format_record import create_formatter, format_record, format_text

__all__ = ["DeliveryChannel", "create_formatter", "format_record", "format_text"]
