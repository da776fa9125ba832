from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

import features
import traces
from errors import ConfigurationError
from frames import FrameState, StepRecord, Trace
from metrics import Metrics, summarize
from policies import Algorithm, EvictionPolicy, get_policy


# Simulator core

class Simulator:
  """
  Drives one replacement policy across a reference string.

  Every call to run() builds a fresh FrameState and a fresh policy
  instance, so a Simulator can be reused and identical inputs always
  produce identical traces.
  """

  def __init__(
    self,
    num_frames: int,
    policy_name: str | Algorithm,
    verbose: bool = False,
  ):
    self.num_frames = traces.validate_frames(num_frames)
    self.policy_cls = get_policy(policy_name)
    self.policy_name = self.policy_cls.algorithm.value
    self.verbose = verbose

    self.frames: Optional[FrameState] = None

  # Internal helpers

  @staticmethod
  def _check_reference(reference: Sequence[int]) -> List[int]:
    pages = list(reference)
    if not pages:
      raise ConfigurationError("Reference string must not be empty.")
    for page in pages:
      if isinstance(page, bool) or not isinstance(page, int) or page < 0:
        raise ConfigurationError(
          f"Page numbers must be non-negative integers, got {page!r}"
        )
    return pages

  def _print_step(self, position: int, record: StepRecord) -> None:
    print(f"[t={position + 1}] Access {record.page} ({record.outcome.value})")
    for idx, p in enumerate(record.frames):
      print(f"    Frame {idx}: {'-' if p is None else p}")
    if record.evicted is not None:
      print(f"  evicted page {record.evicted} from frame {record.slot}")
    print("-" * 40)

  # Public API

  def run(self, reference: Sequence[int]) -> Trace:
    pages = self._check_reference(reference)

    self.frames = FrameState(self.num_frames)
    policy: EvictionPolicy = self.policy_cls(self.num_frames, pages)
    trace = Trace(policy_name=self.policy_name, num_frames=self.num_frames)

    for position, page in enumerate(pages):
      decision = policy.decide(self.frames, page, position)
      record = StepRecord(
        page=page,
        frames=self.frames.snapshot(),
        outcome=decision.outcome,
        slot=decision.slot,
        evicted=decision.evicted,
      )
      trace.steps.append(record)

      if self.verbose:
        self._print_step(position, record)

    return trace


def simulate(
  algorithm: str | Algorithm,
  reference: Sequence[int],
  num_frames: int,
) -> Trace:
  return Simulator(num_frames=num_frames, policy_name=algorithm).run(reference)


# Presentation

def format_steps(trace: Trace) -> str:
  header = ["Step", "Page"] + [f"Frame {i + 1}" for i in range(trace.num_frames)]
  header.append("Status")
  rows = [header]
  for idx, step in enumerate(trace.steps):
    row = [str(idx + 1), str(step.page)]
    row += ["-" if p is None else str(p) for p in step.frames]
    row.append(step.outcome.value)
    rows.append(row)

  widths = [max(len(r[c]) for r in rows) for c in range(len(header))]
  return "\n".join(
    "  ".join(cell.rjust(w) for cell, w in zip(r, widths))
    for r in rows
  )


def format_metrics(trace: Trace, metrics: Metrics) -> str:
  return "\n".join([
    f"Policy:      {trace.policy_name}",
    f"Frames:      {trace.num_frames}",
    f"References:  {metrics.total}",
    f"Page hits:   {metrics.hit_count}",
    f"Page faults: {metrics.fault_count}",
    f"Hit ratio:   {metrics.hit_ratio:.1f}%",
    f"Fault ratio: {metrics.fault_ratio:.1f}%",
  ])


# CLI

def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    description="Page replacement simulator (FIFO, LRU, Optimal, Clock)."
  )
  parser.add_argument("--frames", "-f", type=int, default=traces.DEFAULT_FRAMES)
  parser.add_argument(
    "--policy", "-p", type=str, default="all",
    help="fifo, lru, optimal, clock or all",
  )
  source = parser.add_mutually_exclusive_group()
  source.add_argument(
    "--trace", "-t", type=str,
    help=f"sample name {traces.list_trace_names()} or a file path",
  )
  source.add_argument("--refs", "-r", type=str, help="inline reference string")
  parser.add_argument("--steps", "-s", action="store_true")
  parser.add_argument("--profile", action="store_true")
  parser.add_argument("--verbose", "-v", action="store_true")
  return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
  parser = build_parser()
  args = parser.parse_args(argv)

  try:
    if args.trace is not None:
      reference = traces.load_trace(args.trace)
    else:
      reference = traces.parse_reference_string(
        args.refs if args.refs is not None else traces.DEFAULT_REFERENCE
      )

    if args.policy.lower() == "all":
      algorithms = list(Algorithm)
    else:
      algorithms = [get_policy(args.policy).algorithm]

    sims = [
      Simulator(num_frames=args.frames, policy_name=a, verbose=args.verbose)
      for a in algorithms
    ]
  except ValueError as e:
    parser.error(str(e))

  if args.profile:
    print("Reference profile:")
    for name, value in features.compute_reference_features(reference).items():
      print(f"  {name:16s} {value:.3f}")
    print()

  for sim in sims:
    trace = sim.run(reference)
    print(format_metrics(trace, summarize(trace)))
    if args.steps:
      print(format_steps(trace))
    print()


if __name__ == "__main__":
  main()
