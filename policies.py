from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Type

from errors import ConfigurationError
from frames import FrameState, Outcome


class Algorithm(str, Enum):
  FIFO = "FIFO"
  LRU = "LRU"
  OPTIMAL = "OPTIMAL"
  CLOCK = "CLOCK"


@dataclass(frozen=True)
class Decision:
  outcome: Outcome
  slot: Optional[int] = None
  evicted: Optional[int] = None


HIT = Decision(Outcome.HIT)


class EvictionPolicy:
  """
  Base for the four replacement policies.

  A policy instance belongs to exactly one run: it is built with the frame
  count and the full reference string, keeps whatever side metadata it
  needs next to the shared FrameState, and mutates that FrameState from
  decide(). Build a new instance for every run.
  """

  algorithm: Algorithm

  def __init__(self, capacity: int, reference: Sequence[int]) -> None:
    self.capacity = capacity
    self.reference = reference

  def decide(self, frames: FrameState, page: int, position: int) -> Decision:
    raise NotImplementedError

  def _fault(self, frames: FrameState, slot: int, page: int) -> Decision:
    evicted = frames.place(slot, page)
    return Decision(Outcome.FAULT, slot=slot, evicted=evicted)


# FIFO

class FifoPolicy(EvictionPolicy):
  """
  Circular queue of arrival order. Hits never reorder the queue, and an
  Empty slot under the cursor counts as the oldest arrival, so slots fill
  left to right before the first real eviction.
  """

  algorithm = Algorithm.FIFO

  def __init__(self, capacity: int, reference: Sequence[int]) -> None:
    super().__init__(capacity, reference)
    self.head = 0

  def decide(self, frames: FrameState, page: int, position: int) -> Decision:
    if frames.lookup(page) is not None:
      return HIT

    slot = self.head
    self.head = (self.head + 1) % self.capacity
    return self._fault(frames, slot, page)


# LRU

EMPTY_TIMESTAMP = -1


class LruPolicy(EvictionPolicy):
  """
  Evict the least recently used page.
  Recency is a per-slot logical timestamp; ties go to the lowest slot.
  """

  algorithm = Algorithm.LRU

  def __init__(self, capacity: int, reference: Sequence[int]) -> None:
    super().__init__(capacity, reference)
    self.last_used: List[int] = [EMPTY_TIMESTAMP] * capacity
    self.tick = 0

  def decide(self, frames: FrameState, page: int, position: int) -> Decision:
    self.tick += 1

    slot = frames.lookup(page)
    if slot is not None:
      self.last_used[slot] = self.tick
      return HIT

    victim_idx = frames.first_empty_slot()
    if victim_idx is None:
      oldest_access_time: Optional[int] = None
      for idx, at in enumerate(self.last_used):
        if oldest_access_time is None or at < oldest_access_time:
          oldest_access_time = at
          victim_idx = idx

    self.last_used[victim_idx] = self.tick
    return self._fault(frames, victim_idx, page)


# Optimal (Belady)

class OptimalPolicy(EvictionPolicy):
  """
  Evict the page whose next use lies furthest in the future.

  A page that is never referenced again is taken immediately (lowest such
  slot wins). Otherwise the strictly greatest next-use position wins, so
  the earlier-scanned slot keeps any tie.

  Next-use lookups bisect per-page occurrence lists built once per run
  instead of rescanning the tail of the reference string on every fault.
  """

  algorithm = Algorithm.OPTIMAL

  def __init__(self, capacity: int, reference: Sequence[int]) -> None:
    super().__init__(capacity, reference)
    self.occurrences: Dict[int, List[int]] = {}
    for pos, page in enumerate(reference):
      self.occurrences.setdefault(page, []).append(pos)

  def next_use(self, page: int, position: int) -> Optional[int]:
    """
    Smallest reference position after `position` holding `page`,
    or None if the page is never referenced again.
    """
    positions = self.occurrences.get(page, [])
    i = bisect_right(positions, position)
    if i == len(positions):
      return None
    return positions[i]

  def decide(self, frames: FrameState, page: int, position: int) -> Decision:
    if frames.lookup(page) is not None:
      return HIT

    victim_idx = frames.first_empty_slot()
    if victim_idx is None:
      farthest_next = -1
      victim_idx = 0
      for idx, resident in enumerate(frames.slots):
        nxt = self.next_use(resident, position)
        if nxt is None:
          victim_idx = idx
          break
        if nxt > farthest_next:
          farthest_next = nxt
          victim_idx = idx

    return self._fault(frames, victim_idx, page)


# Clock (second chance)

class ClockPolicy(EvictionPolicy):
  """
  Second-chance replacement with one reference bit per slot.

  Empty slots are filled first, left to right, without moving the sweep
  pointer. Only once every slot is occupied does a fault sweep from the
  pointer, clearing set bits until it reaches a slot whose bit is 0.
  """

  algorithm = Algorithm.CLOCK

  def __init__(self, capacity: int, reference: Sequence[int]) -> None:
    super().__init__(capacity, reference)
    self.ref_bits: List[int] = [0] * capacity
    self.pointer = 0

  def decide(self, frames: FrameState, page: int, position: int) -> Decision:
    slot = frames.lookup(page)
    if slot is not None:
      self.ref_bits[slot] = 1
      return HIT

    free_frame = frames.first_empty_slot()
    if free_frame is not None:
      self.ref_bits[free_frame] = 1
      return self._fault(frames, free_frame, page)

    # Terminates within 2 * capacity steps: each set bit is cleared at most once.
    while self.ref_bits[self.pointer] == 1:
      self.ref_bits[self.pointer] = 0
      self.pointer = (self.pointer + 1) % self.capacity

    victim_idx = self.pointer
    self.ref_bits[victim_idx] = 1
    self.pointer = (self.pointer + 1) % self.capacity
    return self._fault(frames, victim_idx, page)


_POLICY_REGISTRY: Dict[str, Type[EvictionPolicy]] = {
  "fifo": FifoPolicy,
  "lru": LruPolicy,
  "optimal": OptimalPolicy,
  "opt": OptimalPolicy,
  "belady": OptimalPolicy,
  "clock": ClockPolicy,
  "second_chance": ClockPolicy,
}


def list_policy_names() -> List[str]:
  return [a.value.lower() for a in Algorithm]


def get_policy(name: str | Algorithm) -> Type[EvictionPolicy]:
  key = name.value if isinstance(name, Algorithm) else name
  key = key.lower()
  if key not in _POLICY_REGISTRY:
    raise ConfigurationError(
      f"Unknown policy '{name}'. Available: {list(_POLICY_REGISTRY)}"
    )
  return _POLICY_REGISTRY[key]
