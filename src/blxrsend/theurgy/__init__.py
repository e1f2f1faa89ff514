"""
Theurgy - Command implementations for blxrsend.

- relay: Submit a raw transaction to the relay (``blxrsend send``)
"""
