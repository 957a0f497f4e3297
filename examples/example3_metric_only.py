"""
Example 3 – Using the LOOCV Kernel and Searches Directly
=========================================================
Sometimes you just want the leave-one-out score of a given subset, or a
search trace, without the sklearn estimator.

This example shows the low-level API: ``normalize``, ``accuracy`` and
``run_search`` on an instance matrix whose column 0 holds the label.
"""

import numpy as np
from nn_feature_select import accuracy, normalize, run_search

# ---------------------------------------------------------------------------
# Synthetic dataset: 2 informative features + 2 noise features
# ---------------------------------------------------------------------------
rng = np.random.default_rng(0)
n   = 200

features = np.hstack([
    np.vstack([rng.normal([0, 0], 0.4, (n//2, 2)),
               rng.normal([3, 3], 0.4, (n//2, 2))]),   # informative
    rng.normal(0, 1, (n, 2)),                            # noise
])
labels = np.array([1]*(n//2) + [2]*(n//2))

instances = np.column_stack([labels, features])
normalize(instances)

print("Feature columns: 1,2 = informative | 3,4 = noise\n")

# ---------------------------------------------------------------------------
# Score specific subsets
# ---------------------------------------------------------------------------
for subset in [(1, 2), (3, 4), (1, 3), (2, 4), (1, 2, 3, 4), ()]:
    score = accuracy(subset, instances)
    print(f"  acc{subset} = {score:.4f}")

# ---------------------------------------------------------------------------
# Run each search and show its trace
# ---------------------------------------------------------------------------
for strategy in ["forward", "backward", "variance"]:
    result = run_search(strategy, instances)
    print(f"\n{strategy}: {sorted(result.features)}  acc={result.accuracy:.4f}")
    for event in result.trace:
        print(f"  [{event.phase} {event.step}]  "
              f"features={sorted(event.subset)}  acc={event.accuracy:.4f}")
