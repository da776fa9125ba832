from __future__ import annotations

import os
import random
from typing import Dict, List

from errors import ConfigurationError, ParseError

MAX_FRAMES = 100
DEFAULT_FRAMES = 3

# Silberschatz, Operating System Concepts
DEFAULT_REFERENCE = "7 0 1 2 0 3 0 4 2 3 0 3 2 1 2 0 1 7 0 1"


# ----- Input parsing / validation -----

def parse_reference_string(text: str) -> List[int]:
  """
  Split text on any whitespace and keep the tokens that are plain
  non-negative integers. Everything else ("abc", "-3", "1.5") is dropped.
  """
  pages = [
    int(tok) for tok in text.split()
    if tok.isascii() and tok.isdigit()
  ]
  if not pages:
    raise ParseError("Reference string contains no page numbers.")
  return pages


def validate_frames(num_frames: int) -> int:
  if isinstance(num_frames, bool) or not isinstance(num_frames, int):
    raise ConfigurationError(
      f"Number of frames must be an integer, got {num_frames!r}"
    )
  if not (1 <= num_frames <= MAX_FRAMES):
    raise ConfigurationError(
      f"Number of frames must be between 1 and {MAX_FRAMES}, got {num_frames}"
    )
  return num_frames


def load_trace(trace_arg: str) -> List[int]:
  if os.path.isfile(trace_arg):
    with open(trace_arg, "r") as f:
      return parse_reference_string(f.read())

  return get_trace(trace_arg)


# ----- Trace generators for different access patterns -----

def _sequential_trace(
  length: int = 32,
  start_page: int = 0,
) -> List[int]:
  """
  Single forward scan with no repeated pages; every access faults.
  """
  return list(range(start_page, start_page + length))


def _loop_trace(
  num_pages: int,
  length: int = 64,
  seed: int | None = None,
  jitter_prob: float = 0.0,
) -> List[int]:
  """
  Cycle through a working set of num_pages pages. With fewer frames than
  pages this is the classic worst case for LRU and FIFO.
  """
  rng = random.Random(seed)
  trace: List[int] = []
  idx = 0

  for _ in range(length):
    if jitter_prob > 0.0 and rng.random() < jitter_prob:
      idx = rng.randrange(num_pages)
    trace.append(idx)
    idx = (idx + 1) % num_pages

  return trace


def _hotset_trace(
  num_pages_hot: int = 4,
  length: int = 64,
  noise_prob: float = 0.1,
  num_noise_pages: int = 16,
  seed: int | None = None,
) -> List[int]:
  """
  Repeated accesses within a small hot set, with occasional accesses to a
  larger cold region.
  """
  rng = random.Random(seed)
  hot = list(range(num_pages_hot))
  cold = list(range(num_pages_hot, num_pages_hot + num_noise_pages))
  trace: List[int] = []

  for _ in range(length):
    if noise_prob > 0.0 and rng.random() < noise_prob:
      trace.append(rng.choice(cold))
    else:
      trace.append(rng.choice(hot))

  return trace


def _random_trace(
  num_pages: int = 10,
  length: int = 64,
  seed: int | None = None,
) -> List[int]:
  rng = random.Random(seed)
  return [rng.randrange(num_pages) for _ in range(length)]


# ----- Predefined sample traces -----

_PREDEFINED_TRACES: Dict[str, List[int]] = {
  # Textbook example: FIFO 15, LRU 12, Optimal 9 faults with 3 frames
  "textbook": parse_reference_string(DEFAULT_REFERENCE),

  # FIFO faults 9 times with 3 frames but 10 times with 4 (Belady's anomaly)
  "belady": [1, 2, 3, 4, 1, 2, 5, 1, 2, 3, 4, 5],

  # Second-chance walk-through: 5 faults, 2 hits with 3 frames
  "clock_demo": [1, 2, 3, 1, 4, 2, 5],

  "sequential": _sequential_trace(length=32),
  "loop": _loop_trace(num_pages=4, length=48, seed=7),
  "hotset": _hotset_trace(num_pages_hot=4, length=64, noise_prob=0.1, seed=11),
  "random": _random_trace(num_pages=10, length=64, seed=42),
}


def list_trace_names() -> List[str]:
  """
  Return a list of available predefined trace names.
  """
  return sorted(_PREDEFINED_TRACES.keys())


def get_trace(name: str) -> List[int]:
  """
  Return a copy of a predefined trace by name.
  """
  key = name.lower()
  if key not in _PREDEFINED_TRACES:
    raise ValueError(
      f"Unknown trace '{name}'. Available: {list_trace_names()}"
    )
  return list(_PREDEFINED_TRACES[key])
