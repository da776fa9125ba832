import random

import pytest

import traces
from metrics import Metrics, belady_anomalies, compare, fault_curve, summarize
from policies import Algorithm
from simulator import simulate


class TestSummarize:

  def test_textbook_fifo(self) -> None:
    m = summarize(simulate("fifo", traces.get_trace("textbook"), 3))
    assert m == Metrics(total=20, hit_count=5, fault_count=15)
    assert m.hit_ratio == pytest.approx(25.0)
    assert m.fault_ratio == pytest.approx(75.0)

  def test_all_hits_after_first(self) -> None:
    m = summarize(simulate("clock", [3, 3, 3, 3], 1))
    assert m.hit_count == 3
    assert m.fault_count == 1
    assert m.hit_ratio + m.fault_ratio == pytest.approx(100.0)

  @pytest.mark.parametrize("algo", list(Algorithm))
  @pytest.mark.parametrize("frames", [1, 2, 3, 5, 8])
  def test_counts_sum_to_length(self, algo, frames) -> None:
    reference = traces.get_trace("hotset")
    m = summarize(simulate(algo, reference, frames))
    assert m.hit_count + m.fault_count == len(reference)
    assert m.total == len(reference)


class TestCompare:

  def test_textbook(self) -> None:
    results = compare(traces.get_trace("textbook"), 3)
    assert list(results) == list(Algorithm)
    assert results[Algorithm.FIFO].fault_count == 15
    assert results[Algorithm.LRU].fault_count == 12
    assert results[Algorithm.OPTIMAL].fault_count == 9

  def test_subset(self) -> None:
    results = compare([1, 2, 3, 1, 4, 2, 5], 3, [Algorithm.CLOCK])
    assert list(results) == [Algorithm.CLOCK]
    assert results[Algorithm.CLOCK].fault_count == 5

  def test_optimal_is_lower_bound(self) -> None:
    rng = random.Random(1234)
    for _ in range(200):
      length = rng.randint(1, 40)
      reference = [rng.randrange(8) for _ in range(length)]
      frames = rng.randint(1, 6)
      results = compare(reference, frames)
      best = results[Algorithm.OPTIMAL].fault_count
      assert best <= results[Algorithm.FIFO].fault_count
      assert best <= results[Algorithm.LRU].fault_count
      assert best <= results[Algorithm.CLOCK].fault_count


class TestFaultCurve:

  def test_belady_anomaly_under_fifo(self) -> None:
    curve = fault_curve(Algorithm.FIFO, traces.get_trace("belady"), 5)
    assert curve == [12, 12, 9, 10, 5]
    assert belady_anomalies(curve) == [4]

  def test_lru_has_no_anomaly(self) -> None:
    curve = fault_curve("lru", traces.get_trace("belady"), 6)
    assert belady_anomalies(curve) == []
    assert curve[-1] == 5
