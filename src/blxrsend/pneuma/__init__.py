"""
Pneuma - Relay transport layer for blxrsend.

Provides the JSON-RPC request envelope and the websocket sender that
submits raw transactions to the bloXroute relay.

Uses websocket-client for a blocking, single-connection transport.
"""
