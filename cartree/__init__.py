"""CART decision trees and bagging ensembles for mixed tabular data."""

__version__ = "0.1.0"
__all__ = ["bagging", "cli", "data", "tree"]