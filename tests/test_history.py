"""
HistoryLog tests.
"""
import pytest

from core.history import HistoryLog
from tests.conftest import make_opportunity


class TestHistoryLog:

    def test_newest_first(self):
        log = HistoryLog(capacity=5)
        first, second = make_opportunity("BTC"), make_opportunity("ETH")

        log.append(first)
        log.append(second)

        assert log.read() == [second, first]

    def test_evicts_oldest_past_capacity(self):
        log = HistoryLog(capacity=3)
        opps = [make_opportunity(f"P{i}") for i in range(5)]

        for opp in opps:
            log.append(opp)

        assert len(log) == 3
        assert [o.pair for o in log.read()] == ["P4", "P3", "P2"]

    @pytest.mark.parametrize("capacity,appends", [(1, 1), (1, 7), (4, 3), (4, 4), (10, 25)])
    def test_keeps_most_recent_entries(self, capacity, appends):
        log = HistoryLog(capacity=capacity)
        opps = [make_opportunity(f"P{i}") for i in range(appends)]

        for opp in opps:
            log.append(opp)

        expected = list(reversed(opps))[:capacity]
        assert log.read() == expected
        assert len(log) <= capacity

    def test_extend_keeps_batch_order(self):
        log = HistoryLog(capacity=10)
        log.extend([make_opportunity("BTC"), make_opportunity("ETH"), make_opportunity("SOL")])

        assert [o.pair for o in log.read()] == ["SOL", "ETH", "BTC"]

    def test_read_returns_copy(self):
        log = HistoryLog(capacity=2)
        log.append(make_opportunity("BTC"))

        snapshot = log.read()
        snapshot.clear()

        assert len(log) == 1

    def test_empty_on_start(self):
        assert HistoryLog().read() == []
        assert HistoryLog().capacity == 100

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            HistoryLog(capacity=0)
