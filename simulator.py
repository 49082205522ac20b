"""
Discrete-event simulation loop for multi-CPU job scheduling.

One Simulator instance is the context for a run:
- owns the per-run job arena (fresh JobState per job), the ready queue and the CPUs
- admits arrivals, lets the scheduler fill CPUs, asks the event clock for the next
  instant and advances every CPU over the elapsed interval
- records CPU time slots, ready-queue snapshots and job results

Two rescheduling modes are supported:
- QUANTUM_BOUNDARY: CPUs are (re)assigned only at multiples of the quantum; a CPU
  whose job finishes between boundaries is held idle until the next one
- END_TIME: every event instant is an assignment point
"""
from clock import boundary_at_or_after, is_boundary, next_boundary, next_event_time
from cluster import Cluster
from errors import SimulationError
from jobs import EPSILON, JobState
from timeline import QueueSnapshot

QUANTUM_BOUNDARY = "quantum"
END_TIME = "end-time"
MODES = (QUANTUM_BOUNDARY, END_TIME)


class Simulator:
    def __init__(self, jobs, cpu_count, scheduler, mode=QUANTUM_BOUNDARY, quantum=None,
                 overhead=0.0, debug=False):
        self.jobs = list(jobs)
        self.cpu_count = cpu_count
        self.scheduler = scheduler
        self.mode = mode
        self.quantum = quantum
        self.overhead = overhead
        self.debug = debug
        self._reset()

    def _reset(self):
        # Fresh arena every run: caller Job objects are never mutated
        self.states = {job.jid: JobState(job) for job in self.jobs}
        self.pending = sorted(self.states.values(), key=lambda s: (s.arrival, s.jid))
        self.ready = []
        self.cluster = Cluster(self.cpu_count)
        self.time = 0.0
        self.enqueue_counter = 0
        self.slots = []
        self.snapshots = []
        self.job_results = {}
        self.finished = []

    @property
    def quantum_boundaries(self):
        return self.mode == QUANTUM_BOUNDARY

    def log(self, msg):
        if self.debug:
            print(f"[t={self.time:.2f}] {msg}")

    def run(self):
        """
        Run the simulation until every job has completed.

        Returns:
            List of JobResult in completion order
        """
        self._reset()
        self.snapshots.append(QueueSnapshot.capture(0.0, []))

        while self.pending or self.ready or self.cluster.busy():
            self._admit_arrivals()
            self.scheduler.try_schedule(self)
            self._snapshot_queue()

            next_time = next_event_time(self)
            if next_time is None:
                raise SimulationError(
                    f"no next event at t={self.time} with {len(self.pending)} pending, "
                    f"{len(self.ready)} ready and {len(self.cluster.busy())} running jobs")
            if next_time <= self.time:
                raise SimulationError(f"event clock moved from t={self.time} to t={next_time}")

            self._advance(next_time)
            self.time = next_time
            self._resolve()

        for cpu in self.cluster:
            self._record(cpu.close_segment())
        self.slots.sort(key=lambda s: (s.start, s.cpu_id))
        self.log(f"Simulation DONE ({len(self.finished)} jobs, {len(self.slots)} slots)")
        return self.finished

    def available_cpus(self):
        """CPUs that may receive a job at the current instant, in index order."""
        if self.quantum_boundaries and not is_boundary(self.time, self.quantum):
            return []
        return [cpu for cpu in self.cluster
                if not cpu.in_overhead(self.time) and not cpu.is_held(self.time)]

    def enqueue(self, state):
        """Put `state` in the ready queue; RR order is the enqueue stamp, SRTN re-sorts."""
        self.enqueue_counter += 1
        state.enqueue_seq = self.enqueue_counter
        self.ready.append(state)
        self.ready.sort(key=self.scheduler.priority)

    def dispatch(self, cpu, state):
        """
        Give `state` to `cpu`, or start switch overhead instead.

        When overhead is configured and the CPU is being handed over directly from a
        different job, the CPU enters overhead and `state` stays in the ready queue.

        Returns:
            True if the job now runs on the CPU, False if the CPU entered overhead
        """
        if self.needs_overhead(cpu, state):
            self.cluster.start_overhead(cpu, self.time, self.overhead)
            if self.quantum_boundaries:
                cpu.idle_until = boundary_at_or_after(cpu.overhead_until, self.quantum)
            self.log(f"CPU {cpu.index} OVERHEAD until t={cpu.overhead_until:.2f} (next: {state.jid})")
            return False

        self.ready.remove(state)
        slice_length = self.quantum if self.scheduler.uses_time_slice else None
        self.cluster.allocate(cpu, state, self.time, slice_length)
        self.log(f"Job {state.jid} STARTED on CPU {cpu.index} (remaining={state.remaining:.2f})")
        return True

    def needs_overhead(self, cpu, state):
        """True if giving `state` to `cpu` now would cost switch overhead."""
        return self.overhead > 0 and cpu.is_switch(state)

    def release(self, cpu):
        return self.cluster.release(cpu)

    def preempt(self, cpu):
        state = self.release(cpu)
        self.enqueue(state)
        self.log(f"Job {state.jid} PREEMPTED on CPU {cpu.index} (remaining={state.remaining:.2f})")

    def _admit_arrivals(self):
        while self.pending and self.pending[0].arrival <= self.time + EPSILON:
            state = self.pending.pop(0)
            self.log(f"Job {state.jid} ARRIVED (burst={state.burst:.2f})")
            self.scheduler.on_job_arrival(self, state)

    def _snapshot_queue(self):
        snapshot = QueueSnapshot.capture(self.time, self.ready)
        if snapshot.queue != self.snapshots[-1].queue:
            self.snapshots.append(snapshot)

    def _advance(self, next_time):
        """Extend every CPU's trace over [time, next_time) and charge running jobs."""
        elapsed = next_time - self.time
        for cpu in self.cluster:
            label = cpu.occupant(self.time)
            if label is None:
                self._record(cpu.close_segment())
                # an empty interval breaks any hand-off
                cpu.released_jid = None
                continue
            self._record(cpu.extend_segment(label, self.time, next_time))
            if cpu.job is not None:
                cpu.job.record_run(elapsed)
                if self.scheduler.uses_time_slice:
                    cpu.slice_left -= elapsed

    def _resolve(self):
        for cpu in self.cluster:
            if cpu.job is None:
                continue
            if cpu.job.is_complete():
                self._finish(cpu)
            elif self.scheduler.slice_expired(cpu):
                self.scheduler.on_slice_expired(self, cpu)

    def _finish(self, cpu):
        state = self.release(cpu)
        state.remaining = 0.0
        state.finish = self.time
        result = state.result()
        self.job_results[state.jid] = result
        self.finished.append(result)
        if self.quantum_boundaries and not is_boundary(self.time, self.quantum):
            cpu.idle_until = next_boundary(self.time, self.quantum)
        self.log(f"Job {state.jid} FINISHED on CPU {cpu.index} (turnaround={result.turnaround_time:.2f})")
        self.scheduler.on_job_finish(self, state)

    def _record(self, slot):
        if slot is not None:
            self.slots.append(slot)
