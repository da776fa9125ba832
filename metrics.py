from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from frames import Outcome, Trace
from policies import Algorithm


@dataclass(frozen=True)
class Metrics:
  total: int
  hit_count: int
  fault_count: int

  @property
  def hit_ratio(self) -> float:
    return 100.0 * self.hit_count / self.total

  @property
  def fault_ratio(self) -> float:
    return 100.0 * self.fault_count / self.total


def summarize(trace: Trace) -> Metrics:
  """
  Count hits and faults over a finished trace. Ratios are percentages.
  """
  total = len(trace)
  hits = sum(1 for step in trace if step.outcome is Outcome.HIT)
  return Metrics(total=total, hit_count=hits, fault_count=total - hits)


def compare(
  reference: Sequence[int],
  num_frames: int,
  algorithms: Optional[Iterable[Algorithm]] = None,
) -> Dict[Algorithm, Metrics]:
  """
  Run every requested algorithm on the same input, each with its own
  fresh frame state, and summarize each run.
  """
  from simulator import Simulator

  results: Dict[Algorithm, Metrics] = {}
  for algo in algorithms or list(Algorithm):
    sim = Simulator(num_frames=num_frames, policy_name=algo)
    results[algo] = summarize(sim.run(reference))
  return results


def fault_curve(
  algorithm: Algorithm | str,
  reference: Sequence[int],
  max_frames: int,
) -> List[int]:
  """
  Fault counts for 1..max_frames frames; entry i is for i + 1 frames.
  """
  from simulator import Simulator

  curve: List[int] = []
  for n in range(1, max_frames + 1):
    sim = Simulator(num_frames=n, policy_name=algorithm)
    curve.append(summarize(sim.run(reference)).fault_count)
  return curve


def belady_anomalies(curve: Sequence[int]) -> List[int]:
  """
  Frame counts at which adding one frame increased the fault count.
  """
  return [
    n + 1
    for n in range(1, len(curve))
    if curve[n] > curve[n - 1]
  ]
