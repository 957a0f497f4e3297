"""
nn_feature_select.exceptions
============================
Errors raised by the package.

Each error also derives from the built-in exception that plain NumPy code
would raise for the same condition, so ``except ValueError`` keeps working.
"""

from __future__ import annotations


__all__ = [
    "DatasetError",
    "DegenerateFeatureError",
    "FeatureIndexError",
    "FeatureSelectionError",
    "LabelError",
]


class FeatureSelectionError(Exception):
    """Base class for all errors raised by nn_feature_select."""


class DatasetError(FeatureSelectionError, ValueError):
    """The dataset is empty, too small, ragged or unreadable."""


class FeatureIndexError(FeatureSelectionError, IndexError):
    """A feature index does not name a feature column."""


class LabelError(FeatureSelectionError, ValueError):
    """A class label is outside the set a strategy supports."""


class DegenerateFeatureError(FeatureSelectionError, ZeroDivisionError):
    """A statistic would divide by zero (constant column, singleton class)."""
