"""
Curve configuration and shared scalar types.

`config` is imported explicitly (`bondcurve.state.config`) since it depends on
`bondcurve.core`, which itself imports the types below.
"""

from .types import Amount, Weight

__all__ = [
    "Amount",
    "Weight",
]
