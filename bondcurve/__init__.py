"""
bondcurve: fixed-point Bancor-style bonding-curve economics.
"""

__version__ = "0.1.0"
