"""Box-score four factors and win regression analysis."""

__version__ = "0.1.0"
