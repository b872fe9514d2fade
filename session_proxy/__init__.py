"""
Anchor Browser session proxy.

Thin gateway that forwards session actions to the Anchor Browser API
and relays the provider's response back to the caller.
"""

__version__ = "1.0.0"
