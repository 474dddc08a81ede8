"""Carrier quotes and the BigCommerce shipping response envelopes.

The envelopes must match what BigCommerce expects exactly:
    connection: {"data": {"status": "OK", "message": ...}}
    rates:      {"data": [{"carrier_quote": {"code", "display_name", "cost"}}, ...]}
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

CONNECTION_MESSAGE = "MyRover GTA Carrier connection verified"


@dataclass(frozen=True)
class CarrierQuote:
    """A named shipping option with a price."""

    code: str
    display_name: str
    cost: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "carrier_quote": {
                "code": self.code,
                "display_name": self.display_name,
                "cost": float(self.cost),
            }
        }


class QuoteProvider(Protocol):
    def quote(self, payload: dict[str, Any]) -> list[CarrierQuote]: ...


class StaticQuoteProvider:
    """Placeholder pricing: the same two GTA courier options for every cart.

    The cart payload is never inspected.
    """

    QUOTES: tuple[CarrierQuote, ...] = (
        CarrierQuote(
            code="myrover_same_day_gta",
            display_name="MyRover Same-Day Courier (GTA)",
            cost=Decimal("19.95"),
        ),
        CarrierQuote(
            code="myrover_standard_gta",
            display_name="MyRover Next-Day Courier (GTA)",
            cost=Decimal("12.50"),
        ),
    )

    def quote(self, payload: dict[str, Any]) -> list[CarrierQuote]:
        return list(self.QUOTES)


def rates_envelope(quotes: list[CarrierQuote]) -> dict[str, Any]:
    return {"data": [q.to_dict() for q in quotes]}


def connection_envelope() -> dict[str, Any]:
    return {"data": {"status": "OK", "message": CONNECTION_MESSAGE}}
