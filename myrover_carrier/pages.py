"""HTML pages shown to merchants in the BigCommerce admin."""

from __future__ import annotations

import html

_BODY_STYLE = "font-family: Arial; text-align:center; margin-top:50px;"


def installed_page(store_hash: str) -> str:
    """Confirmation page after a successful OAuth callback."""
    store = html.escape(store_hash or "unknown")
    return f"""
      <html>
        <body style="{_BODY_STYLE}">
          <h2>&#x2705; MyRover Carrier App Installed</h2>
          <p>Store: <strong>{store}</strong></p>
          <p>You can now close this window and return to your BigCommerce admin.</p>
        </body>
      </html>
    """


def dashboard_page() -> str:
    return f"""
    <html>
      <body style="{_BODY_STYLE}">
        <h1>&#x1F69A; MyRover GTA Carrier Dashboard</h1>
        <p>Your app is successfully connected to BigCommerce.</p>
        <p>Use MyRover to get live courier quotes in checkout.</p>
      </body>
    </html>
    """


def health_page() -> str:
    return '<div style="font-family: Arial; padding: 20px;">MyRover Carrier API is running &#x2705;</div>'
