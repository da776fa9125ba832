import pytest

from frames import FrameState, Outcome, StepRecord, Trace


class TestFrameState:

  def test_starts_empty(self) -> None:
    frames = FrameState(3)
    assert frames.slots == [None, None, None]
    assert not frames.is_full()
    assert frames.first_empty_slot() == 0

  def test_lookup_finds_resident_slot(self) -> None:
    frames = FrameState(3)
    frames.place(1, 7)
    assert frames.lookup(7) == 1
    assert frames.lookup(8) is None

  def test_first_empty_slot_scans_left_to_right(self) -> None:
    frames = FrameState(3)
    frames.place(0, 4)
    frames.place(2, 5)
    assert frames.first_empty_slot() == 1

  def test_full_when_no_empty_slot(self) -> None:
    frames = FrameState(2)
    frames.place(0, 1)
    frames.place(1, 2)
    assert frames.is_full()
    assert frames.first_empty_slot() is None

  def test_place_returns_previous_page(self) -> None:
    frames = FrameState(1)
    assert frames.place(0, 3) is None
    assert frames.place(0, 9) == 3

  def test_place_out_of_range_raises(self) -> None:
    frames = FrameState(2)
    with pytest.raises(RuntimeError):
      frames.place(2, 1)

  def test_snapshot_is_a_copy(self) -> None:
    frames = FrameState(2)
    frames.place(0, 1)
    snap = frames.snapshot()
    frames.place(1, 2)
    assert snap == (1, None)


class TestTrace:

  def test_victims_in_eviction_order(self) -> None:
    trace = Trace(policy_name="FIFO", num_frames=1, steps=[
      StepRecord(page=1, frames=(1,), outcome=Outcome.FAULT, slot=0),
      StepRecord(page=2, frames=(2,), outcome=Outcome.FAULT, slot=0, evicted=1),
      StepRecord(page=2, frames=(2,), outcome=Outcome.HIT),
      StepRecord(page=3, frames=(3,), outcome=Outcome.FAULT, slot=0, evicted=2),
    ])
    assert len(trace) == 4
    assert trace.pages() == [1, 2, 2, 3]
    assert trace.victims() == [1, 2]
    assert trace.steps[2].is_hit
