"""
Example 1 – Breast Cancer (Binary Classification)
==================================================
Compares the three greedy strategies on the same data.

Dataset : Wisconsin Breast Cancer (30 features, 2 classes, 569 samples)
Score   : leave-one-out 1-NN accuracy on min-max scaled features
"""

import time

from sklearn.datasets import load_breast_cancer
from sklearn.model_selection import train_test_split
from sklearn.neighbors import KNeighborsClassifier
from sklearn.metrics import accuracy_score

from nn_feature_select import NearestNeighborFeatureSelector
from nn_feature_select.plot import plot_search_trace

# ---------------------------------------------------------------------------
# 1. Load data
# ---------------------------------------------------------------------------
X, y = load_breast_cancer(return_X_y=True)
feature_names = load_breast_cancer().feature_names.tolist()

X_train, X_test, y_train, y_test = train_test_split(
    X, y, test_size=0.2, random_state=42, stratify=y,
)

print(f"Dataset: {X.shape[0]} samples, {X.shape[1]} features, 2 classes")

# ---------------------------------------------------------------------------
# 2. Run every strategy
# ---------------------------------------------------------------------------
selectors = {}
for strategy in ["variance", "forward", "backward"]:
    selector = NearestNeighborFeatureSelector(strategy=strategy, verbose=1)
    start = time.perf_counter()
    selector.fit(X_train, y_train)
    print(f"  ({time.perf_counter() - start:.1f} s)")
    print(selector.summary())
    print()
    selectors[strategy] = selector

# ---------------------------------------------------------------------------
# 3. Evaluate on held-out test set
# ---------------------------------------------------------------------------
for strategy, selector in selectors.items():
    if not selector.selected_features_:
        print(f"{strategy:>9}: no subset beat the full feature set")
        continue
    clf = KNeighborsClassifier(n_neighbors=1)
    clf.fit(selector.transform(X_train), y_train)
    acc = accuracy_score(y_test, clf.predict(selector.transform(X_test)))
    names = ", ".join(selector.get_feature_names_out(feature_names))
    print(f"{strategy:>9}: test accuracy {acc:.4f} with [{names}]")

# ---------------------------------------------------------------------------
# 4. Visualise
# ---------------------------------------------------------------------------
forward = selectors["forward"]
plot_search_trace(
    forward.trace_,
    highlight=frozenset(i + 1 for i in forward.selected_features_),
    title="Breast Cancer – forward selection trace",
    save_path="example1_trace.png",
)
print("\nPlot saved: example1_trace.png")
