"""
Example 2 – Multi-class Classification & sklearn Pipeline
==========================================================
Demonstrates:
  * Multi-class support (Iris dataset, 3 classes)
  * Integration with a scikit-learn Pipeline
  * Comparing SVM and KNN on the selected subset

The selector fits inside a Pipeline like any other transformer.
"""

import numpy as np
from sklearn.datasets import load_iris
from sklearn.svm import SVC
from sklearn.neighbors import KNeighborsClassifier
from sklearn.preprocessing import StandardScaler
from sklearn.pipeline import Pipeline
from sklearn.model_selection import cross_val_score

from nn_feature_select import NearestNeighborFeatureSelector, normalize
from nn_feature_select.plot import plot_feature_space_2d

# ---------------------------------------------------------------------------
# 1. Load data
# ---------------------------------------------------------------------------
X, y = load_iris(return_X_y=True)
feature_names = load_iris().feature_names

print(f"Dataset: {X.shape[0]} samples, {X.shape[1]} features, 3 classes\n")

# ---------------------------------------------------------------------------
# 2. Use selector inside a Pipeline
# ---------------------------------------------------------------------------
pipe = Pipeline([
    ("scaler",   StandardScaler()),
    ("selector", NearestNeighborFeatureSelector(strategy="forward", verbose=2)),
    ("clf",      SVC(kernel="rbf")),
])

pipe.fit(X, y)

selector = pipe.named_steps["selector"]
print()
print(selector.summary())

# ---------------------------------------------------------------------------
# 3. Cross-validate the full pipeline
# ---------------------------------------------------------------------------
pipe.set_params(selector__verbose=0)
scores = cross_val_score(pipe, X, y, cv=5, scoring="accuracy")
print(f"\n5-fold CV accuracy (full pipeline): {scores.mean():.4f} ± {scores.std():.4f}")

# ---------------------------------------------------------------------------
# 4. Compare SVM vs KNN on the selected subset
# ---------------------------------------------------------------------------
X_red = selector.transform(X)

for name, clf in [("SVM", SVC(kernel="rbf")), ("KNN", KNeighborsClassifier(n_neighbors=5))]:
    acc = cross_val_score(clf, X_red, y, cv=5).mean()
    print(f"  CV accuracy on selected features – {name}: {acc:.4f}")

# ---------------------------------------------------------------------------
# 5. Visualise two of the selected features
# ---------------------------------------------------------------------------
instances = np.column_stack([y + 1.0, X])
normalize(instances)

pair = list(dict.fromkeys(selector.selected_features_ + (0, 1)))[:2]
plot_feature_space_2d(
    instances,
    feature_indices=(pair[0] + 1, pair[1] + 1),
    feature_names=["class"] + list(feature_names),
    title="Iris – selected feature space",
    save_path="example2_feature_space.png",
)

print("\nPlot saved: example2_feature_space.png")
