"""
nn_feature_select.metric
========================
Distance kernel, 1-nearest-neighbor classifier, leave-one-out evaluator and
min-max normalizer.

A dataset ("instances") is a 2-D float array with one row per instance.
Column 0 holds the class label; columns 1..N-1 hold the features.  A feature
set is any iterable of column indices drawn from ``[1, N-1]``.

Computational notes
-------------------
* Distances are *squared* Euclidean.  The square root is monotonic, so it
  never changes which instance is nearest, and skipping it saves work.
* Pairwise distances use SciPy's ``cdist`` in row blocks of
  ``_BLOCK_SIZE`` rows, so LOOCV on n instances costs O(n² · |S|) time but
  only O(_BLOCK_SIZE · n) memory.
* Ties between equally distant neighbors go to the lowest row index
  (``argmin`` returns the first minimum).
"""

from __future__ import annotations

import operator
from typing import Iterable, Sequence

import numpy as np
from scipy.spatial.distance import cdist, sqeuclidean

from .exceptions import DatasetError, DegenerateFeatureError, FeatureIndexError


__all__ = [
    "accuracy",
    "check_instances",
    "distance",
    "nearest_neighbor_index",
    "nearest_neighbors",
    "normalize",
]

_BLOCK_SIZE = 1024


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------

def check_instances(instances, *, min_instances: int = 1) -> np.ndarray:
    """Validate a dataset and return it as a 2-D float array.

    Parameters
    ----------
    instances : ndarray or sequence of sequences
        One row per instance, label first.
    min_instances : int, default=1
        Minimum number of rows required.

    Returns
    -------
    np.ndarray, shape (n_instances, n_columns)
        The same array when ``instances`` already is a float ndarray.

    Raises
    ------
    DatasetError
        If the dataset is empty, ragged, not 2-D, or has fewer than
        ``min_instances`` rows.
    """
    if isinstance(instances, np.ndarray):
        if instances.ndim != 2:
            raise DatasetError(
                f"instances must be a 2-D array, got {instances.ndim}-D."
            )
        data = np.asarray(instances, dtype=float)
    else:
        rows = [list(row) for row in instances]
        if not rows:
            raise DatasetError("the dataset has no instances.")
        widths = sorted({len(row) for row in rows})
        if len(widths) > 1:
            raise DatasetError(
                f"all instances must have the same length, got lengths {widths}."
            )
        data = np.asarray(rows, dtype=float)

    if len(data) == 0:
        raise DatasetError("the dataset has no instances.")
    if data.shape[1] == 0:
        raise DatasetError("instances have no label column.")
    if len(data) < min_instances:
        raise DatasetError(
            f"at least {min_instances} instances are required, got {len(data)}."
        )
    return data


def distance(
    feature_set: Iterable[int],
    a: Sequence[float],
    b: Sequence[float],
) -> float:
    """Squared Euclidean distance between two instances over a feature set.

    Parameters
    ----------
    feature_set : iterable of int
        Column indices taking part in the distance.
    a, b : sequence of float
        Two instances (label first).

    Returns
    -------
    float
        Sum of squared differences; ``0.0`` for an empty feature set.

    Examples
    --------
    >>> from nn_feature_select import distance
    >>> distance({1, 2}, [1, 0.0, 0.0], [2, 3.0, 4.0])
    25.0
    """
    a_arr = np.asarray(a, dtype=float)
    b_arr = np.asarray(b, dtype=float)
    columns = sorted({operator.index(i) for i in feature_set})
    limit = min(len(a_arr), len(b_arr))
    bad = [i for i in columns if not 0 <= i < limit]
    if bad:
        raise FeatureIndexError(
            f"feature indices {bad} are out of range for instances of "
            f"length {len(a_arr)} and {len(b_arr)}."
        )
    if not columns:
        return 0.0
    return float(sqeuclidean(a_arr[columns], b_arr[columns]))


def nearest_neighbor_index(
    feature_set: Iterable[int],
    instances,
    query_index: int,
) -> int:
    """Index of the instance closest to ``instances[query_index]``.

    The query itself is never returned.  Among equally distant instances the
    one with the lowest index wins, so with an empty feature set the result
    is simply the first instance other than the query.

    Parameters
    ----------
    feature_set : iterable of int
        Feature columns used for the distance.
    instances : array-like, shape (n_instances, n_columns)
    query_index : int
        Row of the query, in ``[0, n_instances)``.  Negative indices are
        rejected rather than counted from the end.

    Returns
    -------
    int

    Raises
    ------
    IndexError
        If ``query_index`` is outside ``[0, n_instances)``.
    """
    data = check_instances(instances, min_instances=2)
    columns = _feature_columns(feature_set, data.shape[1])
    n = len(data)
    if not 0 <= query_index < n:
        raise IndexError(
            f"query_index {query_index} is out of range for {n} instances."
        )
    row = np.array([query_index])
    return int(_neighbors(data, columns, row)[0])


def nearest_neighbors(feature_set: Iterable[int], instances) -> np.ndarray:
    """Leave-one-out nearest neighbor of every instance.

    Returns
    -------
    np.ndarray of int, shape (n_instances,)
        ``result[i] == nearest_neighbor_index(feature_set, instances, i)``.
    """
    data = check_instances(instances, min_instances=2)
    columns = _feature_columns(feature_set, data.shape[1])
    return _neighbors(data, columns, np.arange(len(data)))


def accuracy(feature_set: Iterable[int], instances) -> float:
    """Leave-one-out 1-NN accuracy of a feature set.

    Every instance is classified by the label of its nearest *other*
    instance; the score is the fraction classified correctly.

    Parameters
    ----------
    feature_set : iterable of int
        Feature columns, each in ``[1, n_columns - 1]``.
    instances : array-like, shape (n_instances, n_columns)
        At least two instances, label in column 0.

    Returns
    -------
    float
        Accuracy in [0, 1].

    Examples
    --------
    >>> import numpy as np
    >>> from nn_feature_select import accuracy
    >>> X = np.array([[1, 0.0], [1, 0.1], [2, 0.9], [2, 1.0]])
    >>> accuracy({1}, X)
    1.0
    """
    data = check_instances(instances, min_instances=2)
    columns = _feature_columns(feature_set, data.shape[1])
    return _loocv_accuracy(data, columns)


def normalize(instances: np.ndarray) -> None:
    """Min-max scale every feature column of ``instances`` in place.

    Each feature column becomes ``(x - min) / (max - min)``; the label
    column is left alone.  Rows holding only a label are a no-op.

    Parameters
    ----------
    instances : np.ndarray of float, shape (n_instances, n_columns)

    Raises
    ------
    TypeError
        If ``instances`` is not a float ndarray (it could not be modified
        in place).
    DegenerateFeatureError
        If a feature column is constant.  Nothing is modified in that case.
    """
    if not isinstance(instances, np.ndarray) or instances.dtype.kind != "f":
        raise TypeError(
            "normalize scales in place and needs a float numpy array, "
            f"got {type(instances).__name__}."
        )
    check_instances(instances)
    if instances.shape[1] <= 1:
        return

    features = instances[:, 1:]
    lo = features.min(axis=0)
    span = features.max(axis=0) - lo
    constant = (np.flatnonzero(span == 0) + 1).tolist()
    if constant:
        raise DegenerateFeatureError(
            f"feature columns {constant} are constant; min-max scaling "
            "would divide by zero."
        )
    instances[:, 1:] = (features - lo) / span


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _feature_columns(feature_set: Iterable[int], n_columns: int) -> list[int]:
    """Sorted, de-duplicated feature columns, checked against the label column."""
    columns = sorted({operator.index(i) for i in feature_set})
    bad = [i for i in columns if not 1 <= i < n_columns]
    if bad:
        raise FeatureIndexError(
            f"feature indices {bad} are out of range [1, {n_columns - 1}]."
        )
    return columns


def _neighbors(data: np.ndarray, columns: list[int], rows: np.ndarray) -> np.ndarray:
    """Nearest neighbor (excluding itself) of each row position in ``rows``."""
    n = len(data)
    sub = data[:, columns]
    result = np.empty(len(rows), dtype=np.intp)

    for start in range(0, len(rows), _BLOCK_SIZE):
        block = rows[start:start + _BLOCK_SIZE]
        if columns:
            dist = cdist(sub[block], sub, metric="sqeuclidean")
        else:
            dist = np.zeros((len(block), n))
        dist[np.arange(len(block)), block] = np.inf
        result[start:start + len(block)] = dist.argmin(axis=1)

    return result


def _loocv_accuracy(data: np.ndarray, columns: list[int]) -> float:
    """LOOCV accuracy on an already validated dataset."""
    labels = data[:, 0]
    neighbors = _neighbors(data, columns, np.arange(len(data)))
    return float(np.mean(labels[neighbors] == labels))
