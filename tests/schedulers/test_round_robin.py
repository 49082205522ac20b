"""
Tests for the Round Robin scheduler.
"""
import pytest
from test_utils import *
from simulator import END_TIME, QUANTUM_BOUNDARY


def test_rr_basic(rr_pair):
    """All jobs complete and the trace is consistent."""
    result = run_scheduler_test("RR", rr_pair, quantum=2)
    assert len(result.job_results) == 2, "All jobs should complete"
    assert result.algorithm == "RR"
    assert result.quantum == 2
    assert_trace_consistent(result, rr_pair)


def test_rr_time_slicing(rr_pair):
    """A job that outlives its quantum goes to the back of the queue."""
    result = run_scheduler_test("RR", rr_pair, quantum=2, mode=QUANTUM_BOUNDARY)

    assert slot_tuples(result) == [
        (0, "J1", 0, 2),
        (0, "J2", 2, 4),
        (0, "J1", 4, 5),
    ]
    assert result.job_results["J1"].turnaround_time == pytest.approx(5)
    assert result.job_results["J2"].turnaround_time == pytest.approx(3)
    assert result.cpu_utilization == pytest.approx(100.0)


def test_rr_queue_snapshots(rr_pair):
    """The ready queue is recorded whenever its contents change."""
    result = run_scheduler_test("RR", rr_pair, quantum=2)
    snaps = [(s.time, s.queue) for s in result.queue_snapshots]
    assert snaps == [
        (0, ()),
        (1, (("J2", 2),)),
        (2, (("J1", 1),)),
        (4, ()),
    ]


def test_rr_single_job_is_one_slot(single_job):
    """A lone job that is handed straight back to its CPU shows as one continuous slot."""
    for mode in (QUANTUM_BOUNDARY, END_TIME):
        result = run_scheduler_test("RR", single_job, quantum=1, mode=mode)
        assert slot_tuples(result) == [(0, "J1", 0, 3)], f"mode {mode}"
        assert result.job_results["J1"].turnaround_time == pytest.approx(3)
        assert result.cpu_utilization == pytest.approx(100.0)


def test_rr_early_completion_waits_for_boundary():
    """In quantum-boundary mode the CPU idles between an early completion and the next boundary."""
    jobs = [
        create_test_job("A", 0, 1),
        create_test_job("B", 0, 3),
    ]
    result = run_scheduler_test("RR", jobs, quantum=2, mode=QUANTUM_BOUNDARY)
    assert slot_tuples(result) == [
        (0, "A", 0, 1),
        (0, "IDLE", 1, 2),
        (0, "B", 2, 5),
    ]
    assert result.job_results["B"].turnaround_time == pytest.approx(5)
    assert result.cpu_utilization == pytest.approx(80.0)


def test_rr_end_time_reassigns_immediately():
    """In end-time mode the next job starts the moment the CPU frees up."""
    jobs = [
        create_test_job("A", 0, 1),
        create_test_job("B", 0, 3),
    ]
    result = run_scheduler_test("RR", jobs, quantum=2, mode=END_TIME)
    assert slot_tuples(result) == [
        (0, "A", 0, 1),
        (0, "B", 1, 4),
    ]
    assert result.job_results["B"].turnaround_time == pytest.approx(4)


def test_rr_requeue_before_same_instant_arrival():
    """A job whose slice expires at t is queued ahead of a job arriving at t."""
    jobs = [
        create_test_job("A", 0, 2),
        create_test_job("B", 1, 1),
    ]
    result = run_scheduler_test("RR", jobs, quantum=1, mode=END_TIME)
    assert result.job_results["A"].end_time == pytest.approx(2)
    assert result.job_results["B"].end_time == pytest.approx(3)
    assert result.completion_order() == ["A", "B"]


def test_rr_multiple_cpus():
    """Several CPUs serve one shared FIFO queue."""
    jobs = [
        create_test_job("A", 0, 3),
        create_test_job("B", 0, 3),
        create_test_job("C", 0, 3),
    ]
    result = run_scheduler_test("RR", jobs, cpu_count=2, quantum=1, mode=END_TIME)

    assert result.job_results["A"].end_time == pytest.approx(4)
    assert result.job_results["B"].end_time == pytest.approx(4)
    assert result.job_results["C"].end_time == pytest.approx(5)
    # C waits for the first slices to expire
    assert result.job_results["C"].start_time == 1
    assert_trace_consistent(result, jobs)


def test_rr_switching_overhead():
    """Overhead is paid on every hand-off between different jobs."""
    jobs = [
        create_test_job("A", 0, 3),
        create_test_job("B", 0, 2),
    ]
    result = run_scheduler_test("RR", jobs, quantum=2, mode=END_TIME, overhead=1)

    assert slot_tuples(result) == [
        (0, "A", 0, 2),
        (0, "OVERHEAD", 2, 3),
        (0, "B", 3, 5),
        (0, "OVERHEAD", 5, 6),
        (0, "A", 6, 7),
    ]
    overhead_slots = [s for s in result.cpu_time_slots if s.is_overhead]
    assert len(overhead_slots) == 2
    assert all(not s.is_idle for s in overhead_slots)
    assert result.average_turnaround_time == pytest.approx(6)
    assert result.cpu_utilization == pytest.approx(5 / 7 * 100)


def test_rr_no_overhead_when_same_job_continues(single_job):
    """Re-dispatching the job that just left the CPU costs nothing."""
    result = run_scheduler_test("RR", single_job, quantum=1, mode=END_TIME, overhead=0.5)
    assert slot_tuples(result) == [(0, "J1", 0, 3)]
    assert not any(s.is_overhead for s in result.cpu_time_slots)


def test_rr_overhead_in_quantum_mode():
    """After overhead the CPU still waits for a quantum boundary before taking the job."""
    jobs = [
        create_test_job("A", 0, 2),
        create_test_job("B", 0, 2),
    ]
    result = run_scheduler_test("RR", jobs, quantum=2, mode=QUANTUM_BOUNDARY, overhead=0.5)
    assert slot_tuples(result) == [
        (0, "A", 0, 2),
        (0, "OVERHEAD", 2, 2.5),
        (0, "IDLE", 2.5, 4),
        (0, "B", 4, 6),
    ]
    assert result.cpu_utilization == pytest.approx(4 / 6 * 100)
    assert_trace_consistent(result, jobs)


def test_rr_overhead_keeps_fifo_order_across_cpus():
    """The queue head goes to the CPU that owes no overhead, ahead of later jobs."""
    jobs = [
        create_test_job("X", 0, 2),
        create_test_job("B", 2, 3),
        create_test_job("C", 2, 3),
    ]
    result = run_scheduler_test("RR", jobs, cpu_count=2, quantum=5, mode=END_TIME, overhead=0.5)

    assert result.job_results["B"].start_time <= result.job_results["C"].start_time
    assert result.job_results["B"].start_time == 2
    assert result.job_results["C"].start_time == pytest.approx(2.5)
    assert slot_tuples(result, cpu_id=1) == [(1, "B", 2, 5)]
    assert slot_tuples(result, cpu_id=0) == [
        (0, "X", 0, 2),
        (0, "OVERHEAD", 2, 2.5),
        (0, "C", 2.5, 5.5),
    ]
    assert_trace_consistent(result, jobs)
