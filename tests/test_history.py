"""History buffer tests: bounds, FIFO eviction, snapshot isolation."""

import threading

import pytest

from fireworks_relay.relay.history import HistoryBuffer
from fireworks_relay.relay.validator import validate_event


def _ev(i: int):
    return validate_event({"t": i, "x": (i % 10) / 10}).event


@pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 10])
def test_length_is_bounded(n):
    """snapshot() holds the most recent min(n, capacity) events in order."""
    buf = HistoryBuffer(capacity=3)
    events = [_ev(i) for i in range(n)]
    for e in events:
        buf.append(e)
    snap = buf.snapshot()
    assert len(snap) == min(n, 3)
    assert snap == events[-3:]


def test_full_buffer_evicts_exactly_the_oldest():
    buf = HistoryBuffer(capacity=2)
    a, b, c = _ev(1), _ev(2), _ev(3)
    buf.append(a)
    buf.append(b)
    buf.append(c)
    assert buf.snapshot() == [b, c]
    assert buf.snapshot()[-1] is c


def test_snapshot_is_independent_copy():
    buf = HistoryBuffer(capacity=3)
    buf.append(_ev(1))
    snap = buf.snapshot()
    buf.append(_ev(2))
    snap.clear()
    assert len(buf) == 2
    assert len(buf.snapshot()) == 2


def test_duplicates_are_kept():
    buf = HistoryBuffer(capacity=3)
    e = _ev(1)
    buf.append(e)
    buf.append(e)
    assert buf.snapshot() == [e, e]


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        HistoryBuffer(capacity=0)


def test_default_capacity():
    assert HistoryBuffer().capacity == 120


def test_concurrent_appends_are_not_lost():
    """N threads appending at once: every event lands intact, length bounded."""
    buf = HistoryBuffer(capacity=1000)
    per_thread = 200
    threads = 8
    barrier = threading.Barrier(threads)

    def worker(tid: int):
        barrier.wait()
        for i in range(per_thread):
            buf.append(_ev(tid * per_thread + i))

    pool = [threading.Thread(target=worker, args=(t,)) for t in range(threads)]
    for t in pool:
        t.start()
    for t in pool:
        t.join()

    snap = buf.snapshot()
    assert len(snap) == 1000
    # No duplicates or corruption: each timestamp appears at most once
    stamps = [e.t for e in snap]
    assert len(set(stamps)) == len(stamps)
    # Per-thread order is preserved
    for tid in range(threads):
        mine = [s for s in stamps if s // per_thread == tid]
        assert mine == sorted(mine)


def test_concurrent_appends_below_capacity_keep_everything():
    buf = HistoryBuffer(capacity=120)
    events = [_ev(i) for i in range(50)]
    pool = [threading.Thread(target=buf.append, args=(e,)) for e in events]
    for t in pool:
        t.start()
    for t in pool:
        t.join()
    assert len(buf) == 50
    assert {e.t for e in buf.snapshot()} == set(range(50))
