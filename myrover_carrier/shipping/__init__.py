"""Shipping carrier contract: connection test and rate quotes."""

from myrover_carrier.shipping.quotes import (
    CarrierQuote,
    QuoteProvider,
    StaticQuoteProvider,
    connection_envelope,
    rates_envelope,
)

__all__ = [
    "CarrierQuote",
    "QuoteProvider",
    "StaticQuoteProvider",
    "connection_envelope",
    "rates_envelope",
]
