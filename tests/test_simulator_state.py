"""
Test to verify that the Simulator doesn't cause state pollution between runs.
Checks that caller jobs are never mutated and that repeated runs agree.
"""
import pytest
from simulator import END_TIME, QUANTUM_BOUNDARY, Simulator
from schedulers.srtn import SRTN
from schedulers.round_robin import RoundRobin
from schedule import run_round_robin, run_srtn
from jobs import Job, JobState
from clock import next_event_time


def test_simulator_resets_job_state(four_jobs):
    """One Simulator can be reused with different schedulers without state pollution."""
    simulator = Simulator(four_jobs, 2, SRTN(), mode=END_TIME, quantum=2)
    srtn_first = simulator.run()
    srtn_slots = list(simulator.slots)

    # Reuse the SAME simulator with a DIFFERENT scheduler
    simulator.scheduler = RoundRobin(2)
    rr_results = simulator.run()
    assert len(rr_results) == 4, "Every job must run again from scratch"
    assert all(r.turnaround_time > 0 for r in rr_results)

    # And back to SRTN: identical to the first run
    simulator.scheduler = SRTN()
    srtn_again = simulator.run()
    assert srtn_again == srtn_first
    assert simulator.slots == srtn_slots


def test_caller_jobs_are_not_mutated(four_jobs):
    """Job definitions keep their original values after any number of runs."""
    before = [(j.jid, j.arrival, j.burst) for j in four_jobs]
    run_srtn(four_jobs, 2, mode=END_TIME)
    run_round_robin(four_jobs, 1, 1)
    after = [(j.jid, j.arrival, j.burst) for j in four_jobs]
    assert before == after


def test_job_definitions_are_read_only():
    job = Job("J1", 0, 3)
    with pytest.raises(AttributeError):
        job.burst = 1


def test_repeated_runs_are_equal(four_jobs):
    """Calling the engine twice with the same input yields equal results."""
    for mode in (QUANTUM_BOUNDARY, END_TIME):
        assert run_srtn(four_jobs, 2, mode=mode) == run_srtn(four_jobs, 2, mode=mode)
        assert run_round_robin(four_jobs, 2, 2, mode=mode, overhead=0.5) == \
            run_round_robin(four_jobs, 2, 2, mode=mode, overhead=0.5)


def test_input_order_does_not_matter(four_jobs):
    """Shuffling the job list does not change the schedule."""
    reordered = list(reversed(four_jobs))
    assert run_srtn(four_jobs, 2, mode=END_TIME) == run_srtn(reordered, 2, mode=END_TIME)
    assert run_round_robin(four_jobs, 2, 1) == run_round_robin(reordered, 2, 1)


def test_job_state_tracks_remaining_work():
    state = JobState(Job("J1", 1, 2))
    state.mark_started(1)
    state.record_run(1.5)
    state.mark_started(4)
    assert state.start == 1, "first start is kept"
    assert state.remaining == pytest.approx(0.5)
    assert not state.is_complete()
    state.record_run(1.0)
    assert state.remaining == 0.0, "remaining never goes negative"
    assert state.is_complete()
    state.finish = 5
    assert state.result().turnaround_time == 4


def test_late_first_arrival_leaves_gap():
    """Before the first arrival the CPU has no slot; the makespan still starts at 0."""
    result = run_srtn([Job("J1", 2, 1)], 1, mode=END_TIME)
    assert [(s.job_id, s.start, s.end) for s in result.cpu_time_slots] == [("J1", 2, 3)]
    assert result.cpu_utilization == pytest.approx(1 / 3 * 100)


def test_next_event_time_picks_earliest():
    jobs = [Job("A", 0, 5), Job("B", 2, 1)]
    sim = Simulator(jobs, 1, SRTN(), mode=END_TIME)
    sim._admit_arrivals()
    sim.scheduler.try_schedule(sim)
    assert sim.cluster.cpus[0].job.jid == "A"
    assert next_event_time(sim) == 2

    rr = Simulator(jobs, 1, RoundRobin(1.5), mode=END_TIME, quantum=1.5)
    rr._admit_arrivals()
    rr.scheduler.try_schedule(rr)
    assert next_event_time(rr) == 1.5, "slice expiry comes before the arrival"
