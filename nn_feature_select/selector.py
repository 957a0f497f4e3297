"""
nn_feature_select.selector
==========================
Scikit-learn compatible estimator around the greedy 1-NN searches.

The estimator follows the standard sklearn API:

    selector = NearestNeighborFeatureSelector(strategy="forward")
    selector.fit(X_train, y_train)
    X_reduced = selector.transform(X_train)

Feature indices exposed by the estimator are 0-based columns of ``X``; the
search itself works on an instance matrix whose column 0 is the label.
"""

from __future__ import annotations

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from .metric import normalize as normalize_instances
from .search import SearchStrategy, TraceEvent, run_search


__all__ = ["NearestNeighborFeatureSelector"]


class NearestNeighborFeatureSelector(TransformerMixin, BaseEstimator):
    """Greedy feature selector scored by leave-one-out 1-NN accuracy.

    Parameters
    ----------
    strategy : {"forward", "backward", "variance"}, default="forward"
        Search strategy.  ``"variance"`` requires exactly two classes.
    normalize : bool, default=True
        Min-max scale a copy of ``X`` before searching.  Constant columns
        cannot be scaled; drop them first or pass ``normalize=False``.
    verbose : int, default=0
        Verbosity level (0 = silent, 1 = progress, 2 = every evaluation).

    Attributes
    ----------
    selected_features_ : tuple of int
        Sorted indices of the selected columns of ``X``.
    accuracy_ : float
        LOOCV 1-NN accuracy of the selected subset.
    trace_ : tuple of TraceEvent
        Every evaluation made during the search.  Subsets in the trace use
        instance-matrix numbering (column ``j`` of ``X`` is feature ``j+1``).
    classes_ : np.ndarray
        Distinct labels of ``y``; label ``classes_[k]`` is class ``k+1`` in
        the search.
    n_features_in_ : int
        Total number of features seen during fit.

    Examples
    --------
    >>> from sklearn.datasets import load_iris
    >>> from nn_feature_select import NearestNeighborFeatureSelector
    >>>
    >>> X, y = load_iris(return_X_y=True)
    >>> selector = NearestNeighborFeatureSelector(strategy="forward")
    >>> selector.fit(X, y)
    NearestNeighborFeatureSelector()
    >>> selector.selected_features_
    (...)
    """

    def __init__(
        self,
        strategy: str = "forward",
        normalize: bool = True,
        verbose: int = 0,
    ):
        self.strategy  = strategy
        self.normalize = normalize
        self.verbose   = verbose

    # ------------------------------------------------------------------
    # sklearn API
    # ------------------------------------------------------------------

    def fit(self, X: np.ndarray, y: np.ndarray) -> "NearestNeighborFeatureSelector":
        """Run the configured search on ``(X, y)``.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)
            Training data.
        y : array-like, shape (n_samples,)
            Class labels.

        Returns
        -------
        self
        """
        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y)
        strategy = self._check_params(X_arr, y_arr)
        self.n_features_in_ = X_arr.shape[1]

        self.classes_, codes = np.unique(y_arr, return_inverse=True)
        instances = np.column_stack([codes + 1.0, X_arr])
        if self.normalize:
            normalize_instances(instances)

        if self.verbose >= 1:
            print(
                f"[NearestNeighborFeatureSelector] Running {strategy.value} "
                f"search over {self.n_features_in_} features, "
                f"{len(instances)} samples ..."
            )

        result = run_search(strategy, instances, callback=self._report)

        self.selected_features_ = tuple(sorted(i - 1 for i in result.features))
        self.accuracy_          = result.accuracy
        self.trace_             = result.trace

        if self.verbose >= 1:
            print(
                f"[NearestNeighborFeatureSelector] Done.  "
                f"{len(self.trace_)} subsets evaluated.  "
                f"Selected features: {self.selected_features_}  "
                f"LOOCV accuracy = {self.accuracy_:.4f}"
            )

        return self

    def transform(self, X: np.ndarray) -> np.ndarray:
        """Project X onto the selected feature subset.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)

        Returns
        -------
        X_reduced : np.ndarray, shape (n_samples, len(selected_features_))
        """
        check_is_fitted(self, "selected_features_")
        X_arr = np.asarray(X, dtype=float)
        return X_arr[:, list(self.selected_features_)]

    def get_support(self, indices: bool = False):
        """Return a mask or indices of the selected features.

        Parameters
        ----------
        indices : bool, default=False
            If ``True``, return indices; otherwise return a boolean mask.

        Returns
        -------
        mask : np.ndarray of bool, or np.ndarray of int
        """
        check_is_fitted(self, "selected_features_")
        mask = np.zeros(self.n_features_in_, dtype=bool)
        mask[list(self.selected_features_)] = True
        if indices:
            return np.where(mask)[0]
        return mask

    def get_feature_names_out(self, input_features=None):
        """Get feature names for the selected features.

        Parameters
        ----------
        input_features : array-like of str, optional
            Input feature names.  If ``None``, uses ``x0``, ``x1``, etc.

        Returns
        -------
        feature_names_out : np.ndarray of str
        """
        check_is_fitted(self, "selected_features_")
        if input_features is None:
            input_features = [f"x{i}" for i in range(self.n_features_in_)]
        return np.array(
            [input_features[i] for i in self.selected_features_], dtype=object
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_params(self, X: np.ndarray, y: np.ndarray) -> SearchStrategy:
        try:
            strategy = SearchStrategy(self.strategy)
        except ValueError:
            raise ValueError(
                f"strategy must be one of "
                f"{[s.value for s in SearchStrategy]}, got {self.strategy!r}."
            ) from None
        if X.ndim != 2:
            raise ValueError(f"X must be 2-D, got {X.ndim}-D.")
        if len(X) != len(y):
            raise ValueError(
                f"X and y have inconsistent lengths ({len(X)} and {len(y)})."
            )
        return strategy

    def _report(self, event: TraceEvent) -> None:
        if self.verbose >= 2:
            columns = tuple(sorted(i - 1 for i in event.subset))
            print(
                f"  [{event.phase} {event.step}]  "
                f"features={columns}  LOOCV accuracy={event.accuracy:.4f}"
            )

    def summary(self) -> str:
        """Return a human-readable summary of the fitted selector."""
        check_is_fitted(self, "selected_features_")
        return "\n".join([
            "NearestNeighborFeatureSelector – fit summary",
            f"  strategy               : {SearchStrategy(self.strategy).value}",
            f"  n_features_in          : {self.n_features_in_}",
            f"  classes                : {len(self.classes_)}",
            f"  subsets evaluated      : {len(self.trace_)}",
            f"  selected features      : {self.selected_features_}",
            f"  LOOCV accuracy         : {self.accuracy_:.4f}",
        ])
