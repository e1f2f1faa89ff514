"""
Sigil - Relay identity for blxrsend.

Holds the account id / secret hash pair that authenticates the websocket
upgrade, and persists it under ~/.blxrsend/.env.
"""
