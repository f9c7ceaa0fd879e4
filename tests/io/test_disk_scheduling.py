"""Tests for the step-driven disk scheduling engine.

Each step services one pending request and moves the head there, adding
the distance travelled to the running seek total.

Algorithms tested:
    - **FCFS** — First Come, First Served.  Service in arrival order.
    - **SSTF** — Shortest Seek Time First.  Service the nearest request.
    - **SCAN** — Elevator algorithm.  Sweep one way, flip when nothing
      is left ahead.
"""

import pytest

from py_osviz.io.disk import (
    Direction,
    DiskAlgorithm,
    DiskRequest,
    DiskSchedulingEngine,
    FCFSPolicy,
    SCANPolicy,
    SSTFPolicy,
    parse_disk_algorithm,
)
from py_osviz.logging import Logger, LogLevel

# -- Textbook example constants -----------------------------------------------
# Classic disk scheduling example: 8 requests with head at cylinder 50.
_REQUESTS = [98, 183, 37, 122, 14, 124, 65, 67]
_HEAD = 50


def _engine(algorithm: DiskAlgorithm, requests: list[int] | None = None, head: int = _HEAD) -> DiskSchedulingEngine:
    """Create an engine over the textbook queue (or *requests*)."""
    return DiskSchedulingEngine(_REQUESTS if requests is None else requests, algorithm=algorithm, initial_head=head)


def _pending(*positions: int) -> list[DiskRequest]:
    """Build unserved requests in arrival order."""
    return [DiskRequest(position=p, arrival_order=i) for i, p in enumerate(positions)]


# -- Policies -----------------------------------------------------------------


class TestPolicies:
    """Policies are pure functions of the pending set, head and direction."""

    def test_fcfs_picks_earliest_arrival(self) -> None:
        """FCFS ignores distance entirely."""
        chosen, _ = FCFSPolicy().select(_pending(180, 51), head=50, direction=Direction.UP)
        assert chosen is not None
        assert chosen.position == 180

    def test_sstf_tie_goes_to_earlier_arrival(self) -> None:
        """Equidistant requests resolve by arrival order."""
        chosen, _ = SSTFPolicy().select(_pending(60, 40), head=50, direction=Direction.UP)
        assert chosen is not None
        assert chosen.position == 60
        chosen, _ = SSTFPolicy().select(_pending(40, 60), head=50, direction=Direction.UP)
        assert chosen is not None
        assert chosen.position == 40

    def test_scan_down_includes_head_track(self) -> None:
        """Moving down, a request under the head counts as ahead."""
        chosen, direction = SCANPolicy().select(_pending(50, 10, 90), head=50, direction=Direction.DOWN)
        assert chosen is not None
        assert chosen.position == 50
        assert direction is Direction.DOWN

    def test_scan_down_flips_up(self) -> None:
        """Nothing at or below the head sends the sweep back up."""
        chosen, direction = SCANPolicy().select(_pending(90, 70), head=50, direction=Direction.DOWN)
        assert chosen is not None
        assert chosen.position == 70
        assert direction is Direction.UP

    def test_empty_pending(self) -> None:
        """No pending requests yields no choice and keeps the direction."""
        for policy in (FCFSPolicy(), SSTFPolicy(), SCANPolicy()):
            chosen, direction = policy.select([], head=50, direction=Direction.DOWN)
            assert chosen is None
            assert direction is Direction.DOWN


# -- FCFS ---------------------------------------------------------------------


class TestFCFS:
    """FCFS services requests in the order they arrived."""

    def test_order(self) -> None:
        """Service order equals arrival order."""
        assert _engine(DiskAlgorithm.FCFS).run() == _REQUESTS

    def test_total_seek(self) -> None:
        """Total movement is the sum of absolute differences."""
        engine = _engine(DiskAlgorithm.FCFS)
        engine.run()
        expected = 643
        assert engine.total_seek == expected


# -- SSTF ---------------------------------------------------------------------


class TestSSTF:
    """SSTF always services the request nearest to the head."""

    def test_first_pick_is_nearest(self) -> None:
        """From 50 the nearest request is 37 (distance 13)."""
        engine = _engine(DiskAlgorithm.SSTF)
        result = engine.step()
        assert result.request is not None
        expected_position, expected_cost = 37, 13
        assert result.request.position == expected_position
        assert result.cost == expected_cost
        assert engine.total_seek == expected_cost
        expected_id = 2
        assert result.request_id == expected_id

    def test_order_and_total(self) -> None:
        """Full SSTF trace over the textbook queue."""
        engine = _engine(DiskAlgorithm.SSTF)
        assert engine.run() == [37, 14, 65, 67, 98, 122, 124, 183]
        expected = 205
        assert engine.total_seek == expected

    def test_minimality_at_every_step(self) -> None:
        """The chosen distance never exceeds any other pending distance."""
        engine = _engine(DiskAlgorithm.SSTF)
        while not engine.is_complete:
            head = engine.head
            distances = [abs(r.position - head) for r in engine.pending]
            result = engine.step()
            assert result.cost == min(distances)


# -- SCAN ---------------------------------------------------------------------


class TestSCAN:
    """SCAN sweeps one direction, then reverses."""

    def test_first_pick_going_up(self) -> None:
        """Going up from 50 the first request is 65, not the nearer 37."""
        engine = _engine(DiskAlgorithm.SCAN)
        result = engine.step()
        assert result.request is not None
        expected = 65
        assert result.request.position == expected

    def test_order_and_total(self) -> None:
        """Sweep up to 183, flip, then sweep down."""
        engine = _engine(DiskAlgorithm.SCAN)
        assert engine.run() == [65, 67, 98, 122, 124, 183, 37, 14]
        expected = 302
        assert engine.total_seek == expected

    def test_flip_is_visible_after_selection(self) -> None:
        """select_next() keeps the direction change it discovers."""
        engine = _engine(DiskAlgorithm.SCAN, requests=[10, 20], head=_HEAD)
        assert engine.direction is Direction.UP
        chosen = engine.select_next()
        assert chosen is not None
        expected = 20
        assert chosen.position == expected
        assert engine.direction is Direction.DOWN
        assert engine.pending == _pending(10, 20)

    def test_sweep_monotonic_between_flips(self) -> None:
        """Positions only rise while UP and only fall while DOWN."""
        engine = _engine(DiskAlgorithm.SCAN)
        previous = engine.head
        while not engine.is_complete:
            result = engine.step()
            if engine.direction is Direction.UP:
                assert result.head >= previous
            else:
                assert result.head <= previous
            previous = result.head

    def test_no_flip_when_finished(self) -> None:
        """Stepping past the end does not touch the direction."""
        engine = _engine(DiskAlgorithm.SCAN)
        engine.run()
        assert engine.direction is Direction.DOWN
        engine.step()
        assert engine.direction is Direction.DOWN


# -- Engine contract ----------------------------------------------------------


class TestEngine:
    """Step, reset and validation behaviour shared by all policies."""

    @pytest.mark.parametrize("algorithm", list(DiskAlgorithm))
    def test_seek_is_additive(self, algorithm: DiskAlgorithm) -> None:
        """The total equals the sum of per-step head movement."""
        engine = _engine(algorithm)
        heads = [engine.head]
        while not engine.is_complete:
            heads.append(engine.step().head)
        assert engine.total_seek == sum(abs(b - a) for a, b in zip(heads, heads[1:], strict=False))

    def test_terminal_step_is_idempotent(self) -> None:
        """After the last request, steps report finished and change nothing."""
        engine = _engine(DiskAlgorithm.SSTF)
        engine.run()
        before = engine.snapshot()
        for _ in range(3):
            result = engine.step()
            assert result.finished is True
            assert result.request is None
            assert result.cost == 0
        assert engine.snapshot() == before

    def test_served_flag_flips_once(self) -> None:
        """Each request is served exactly once."""
        engine = _engine(DiskAlgorithm.FCFS)
        served_ids = []
        while not engine.is_complete:
            served_ids.append(engine.step().request_id)
        assert sorted(served_ids) == list(range(len(_REQUESTS)))
        assert all(r.served for r in engine.requests)

    def test_reset_restores_initial_state(self) -> None:
        """Reset unserves everything and parks the head at 50."""
        engine = _engine(DiskAlgorithm.SCAN)
        engine.run()
        engine.reset()
        assert engine.head == _HEAD
        assert engine.total_seek == 0
        assert engine.direction is Direction.UP
        assert len(engine.pending) == len(_REQUESTS)

    def test_reset_switches_algorithm(self) -> None:
        """Reset can change the policy for the next run."""
        engine = _engine(DiskAlgorithm.FCFS)
        engine.step()
        engine.reset(algorithm=DiskAlgorithm.SSTF)
        assert engine.algorithm is DiskAlgorithm.SSTF
        first = engine.step().request
        assert first is not None
        expected = 37
        assert first.position == expected

    def test_empty_queue(self) -> None:
        """An engine with no requests is complete from the start."""
        engine = _engine(DiskAlgorithm.FCFS, requests=[])
        assert engine.is_complete
        assert engine.run() == []
        assert engine.step().finished

    def test_positions_validated(self) -> None:
        """Requests and head must fall inside the disk."""
        with pytest.raises(ValueError, match="outside disk"):
            DiskSchedulingEngine([200])
        with pytest.raises(ValueError, match="outside disk"):
            DiskSchedulingEngine([10], initial_head=-1)
        with pytest.raises(ValueError, match="Disk size"):
            DiskSchedulingEngine([], disk_size=0)

    def test_parse_algorithm(self) -> None:
        """Names are case-insensitive; unknown names raise."""
        assert parse_disk_algorithm("scan") is DiskAlgorithm.SCAN
        with pytest.raises(ValueError, match="Unknown disk scheduling"):
            parse_disk_algorithm("c-look")

    def test_snapshot_dict(self) -> None:
        """The snapshot serialises head, direction and requests."""
        engine = _engine(DiskAlgorithm.SCAN)
        engine.step()
        data = engine.snapshot().to_dict()
        expected_head = 65
        assert data["head"] == expected_head
        assert data["direction"] == "up"
        assert {"id": 6, "position": 65, "served": True} in data["requests"]

    def test_logging(self) -> None:
        """Moves are DEBUG; completion is INFO under the disk source."""
        logger = Logger()
        engine = DiskSchedulingEngine(_REQUESTS, algorithm=DiskAlgorithm.SCAN, logger=logger)
        engine.run()
        info = logger.filter(min_level=LogLevel.INFO, source="disk")
        assert [e.message for e in info] == ["all requests served, total seek 302"]
        assert any("sweep reversed at 183" in e.message for e in logger.entries)
