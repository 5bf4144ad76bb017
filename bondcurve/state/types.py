"""
Scalar type aliases shared by the curve engine.
"""

# Type aliases
Amount = int  # Non-negative integer in the u128 domain (base units or fixed-point)
Weight = int  # Reserve ratio in parts per million, 1..1_000_000
