from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class Outcome(str, Enum):
  HIT = "HIT"
  FAULT = "FAULT"


# Frame model

@dataclass
class FrameState:
  """
  Fixed number of physical frame slots. None marks an Empty slot.

  The container only answers questions about occupancy; which slot gets
  overwritten is always decided by the policy driving it.
  """
  capacity: int
  slots: List[Optional[int]] = field(default_factory=list)

  def __post_init__(self) -> None:
    if not self.slots:
      self.slots = [None] * self.capacity

  def lookup(self, page: int) -> Optional[int]:
    for idx, resident in enumerate(self.slots):
      if resident == page:
        return idx
    return None

  def is_full(self) -> bool:
    return all(resident is not None for resident in self.slots)

  def first_empty_slot(self) -> Optional[int]:
    for idx, resident in enumerate(self.slots):
      if resident is None:
        return idx
    return None

  def place(self, slot: int, page: int) -> Optional[int]:
    """
    Put page into slot and return whatever page was there before.
    """
    if not (0 <= slot < self.capacity):
      raise RuntimeError(
        f"Slot index {slot} out of range for {self.capacity} frames"
      )
    previous = self.slots[slot]
    self.slots[slot] = page
    return previous

  def snapshot(self) -> Tuple[Optional[int], ...]:
    return tuple(self.slots)


# Trace records

@dataclass(frozen=True)
class StepRecord:
  page: int
  frames: Tuple[Optional[int], ...]
  outcome: Outcome
  slot: Optional[int] = None
  evicted: Optional[int] = None

  @property
  def is_hit(self) -> bool:
    return self.outcome is Outcome.HIT


@dataclass
class Trace:
  policy_name: str
  num_frames: int
  steps: List[StepRecord] = field(default_factory=list)

  def __len__(self) -> int:
    return len(self.steps)

  def __iter__(self):
    return iter(self.steps)

  def pages(self) -> List[int]:
    return [s.page for s in self.steps]

  def victims(self) -> List[int]:
    """
    Pages that were evicted, in eviction order.
    """
    return [s.evicted for s in self.steps if s.evicted is not None]
