"""
nn_feature_select.io
====================
Reading datasets from plain text.

One instance per line, whitespace separated; the first token is the class
label and the rest are feature values::

    1.0000000e+00  2.6794546e+00  1.9543107e+00
    2.0000000e+00  8.1284721e-01  3.1059862e+00
"""

from __future__ import annotations

import os
import warnings
from typing import Union

import numpy as np

from .exceptions import DatasetError


__all__ = ["load_instances"]


def load_instances(path: Union[str, os.PathLike]) -> np.ndarray:
    """Load a whitespace-delimited dataset.

    Parameters
    ----------
    path : str or path-like

    Returns
    -------
    np.ndarray, shape (n_instances, n_columns)
        Float array, label in column 0.  Not normalized.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    DatasetError
        If the file holds no instances, a non-numeric token, or rows of
        different lengths.
    """
    try:
        with warnings.catch_warnings():
            # an empty file is reported below as a DatasetError
            warnings.simplefilter("ignore", UserWarning)
            data = np.loadtxt(path, dtype=float, ndmin=2)
    except ValueError as exc:
        raise DatasetError(f"cannot parse dataset {os.fspath(path)!r}: {exc}") from exc

    if data.size == 0:
        raise DatasetError(f"dataset {os.fspath(path)!r} has no instances.")
    return data
