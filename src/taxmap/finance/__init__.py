"""ICIO construction budget and tax estimation.

Default cost tables ship with this package as ``icio_calculator.yml``.
"""

from taxmap.finance.icio import ICIOCalculator

__all__ = ["ICIOCalculator"]
