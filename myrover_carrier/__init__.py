"""MyRover carrier app for BigCommerce: OAuth install flow plus shipping-rate endpoints."""

__version__ = "0.1.0"
