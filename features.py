from __future__ import annotations

from typing import Dict, Sequence

import numpy as np

FEATURE_NAMES = (
  "length",
  "unique_pages",
  "unique_ratio",
  "entropy",
  "top3_frac",
  "sequential_frac",
  "reuse_mean",
  "reuse_max",
)


def compute_reference_features(reference: Sequence[int]) -> Dict[str, float]:
  """
  Summarize the locality of a reference string.

    length           = number of references
    unique_pages     = distinct page numbers
    unique_ratio     = unique_pages / length
    entropy          = entropy (bits) of the page distribution
    top3_frac        = fraction of accesses to the 3 most frequent pages
    sequential_frac  = fraction of consecutive diffs == +1
    reuse_mean       = mean reuse distance (length if nothing is reused)
    reuse_max        = max reuse distance (length if nothing is reused)

  A reuse distance is the number of positions between two references to the
  same page. Pages with reuse distance below the frame count always hit
  under LRU, which makes these numbers handy next to the fault counts.
  """
  n = len(reference)
  if n == 0:
    return {name: 0.0 for name in FEATURE_NAMES}

  vals = np.asarray(reference, dtype=np.int64)

  unique_vals, counts = np.unique(vals, return_counts=True)
  p = counts.astype(np.float64) / float(n)
  entropy = float(-(p * np.log2(p)).sum())

  sorted_counts = np.sort(counts)[::-1]
  top3_frac = float(sorted_counts[:3].sum()) / float(n)

  if n > 1:
    sequential_frac = float(np.mean(np.diff(vals) == 1))
  else:
    sequential_frac = 0.0

  last_pos: Dict[int, int] = {}
  reuse_dists = []
  for i, v in enumerate(reference):
    if v in last_pos:
      reuse_dists.append(i - last_pos[v])
    last_pos[v] = i

  if reuse_dists:
    reuse_arr = np.array(reuse_dists, dtype=np.int64)
    reuse_mean = float(np.mean(reuse_arr))
    reuse_max = float(np.max(reuse_arr))
  else:
    reuse_mean = float(n)
    reuse_max = float(n)

  return {
    "length": float(n),
    "unique_pages": float(len(unique_vals)),
    "unique_ratio": len(unique_vals) / float(n),
    "entropy": entropy,
    "top3_frac": top3_frac,
    "sequential_frac": sequential_frac,
    "reuse_mean": reuse_mean,
    "reuse_max": reuse_max,
  }
