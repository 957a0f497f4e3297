"""
nn_feature_select
=================
Greedy feature-subset selection for a 1-nearest-neighbor classifier,
scored by leave-one-out cross-validation (LOOCV).

Exhaustive search over feature subsets is exponential in the number of
features.  This package instead hill-climbs through the subset lattice and
scores every candidate with the LOOCV accuracy of a 1-NN classifier.

Core idea
---------
**Evaluation**
    For a feature subset S, each instance is classified by the label of its
    nearest *other* instance under squared Euclidean distance restricted to
    S.  The score is::

        acc(S) = (number of instances whose neighbor shares their label) / n

**Search**
    * forward selection: grow S one best feature at a time;
    * backward elimination: shrink the full set one feature at a time;
    * variance-ranked selection: add features in order of increasing
      within-class variance (two-class data only).

    Each search walks its full path and returns the best subset it saw.

Public API
----------
NearestNeighborFeatureSelector  – sklearn-compatible estimator
accuracy                        – LOOCV 1-NN accuracy of a feature subset
normalize                       – in-place min-max scaling of feature columns
forward_selection, backward_elimination, variance_ranked_selection
run_search                      – run a strategy by name and collect its trace
load_instances                  – read a whitespace-delimited dataset
"""

from .exceptions import (
    DatasetError,
    DegenerateFeatureError,
    FeatureIndexError,
    FeatureSelectionError,
    LabelError,
)
from .io       import load_instances
from .metric   import accuracy, distance, nearest_neighbor_index, normalize
from .search   import (
    RoundChoice,
    SearchResult,
    SearchStrategy,
    TraceEvent,
    backward_elimination,
    forward_selection,
    run_search,
    variance_ranked_selection,
)
from .selector import NearestNeighborFeatureSelector

__all__ = [
    "DatasetError",
    "DegenerateFeatureError",
    "FeatureIndexError",
    "FeatureSelectionError",
    "LabelError",
    "NearestNeighborFeatureSelector",
    "RoundChoice",
    "SearchResult",
    "SearchStrategy",
    "TraceEvent",
    "accuracy",
    "backward_elimination",
    "distance",
    "forward_selection",
    "load_instances",
    "nearest_neighbor_index",
    "normalize",
    "run_search",
    "variance_ranked_selection",
]

__version__ = "0.1.0"
