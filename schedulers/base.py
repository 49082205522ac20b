"""
Abstract base class for CPU scheduling policies.

Every policy is described by two things:
1. priority(state): sort key for the ready queue (smaller runs first)
2. preemptive: whether a waiting job may evict a resident job at an assignment point

Round Robin adds a third ingredient, the time slice, via `uses_time_slice` and the
slice_expired / on_slice_expired hooks. The shared try_schedule() implements CPU
assignment for both policies; subclasses only describe ordering and preemption.
"""
from abc import ABC, abstractmethod


class Scheduler(ABC):
    name = "base"
    preemptive = False
    uses_time_slice = False

    @abstractmethod
    def priority(self, state):
        """
        Sort key for a job competing for a CPU.

        Args:
            state: JobState of a ready or resident job

        Returns:
            A tuple; jobs with smaller keys are preferred. Must be a total order.
        """
        pass

    def on_job_arrival(self, sim, state):
        """Handle a newly admitted job: place it in the ready queue."""
        sim.enqueue(state)

    def on_job_finish(self, sim, state):
        """Hook invoked after a job completes and its CPU is released."""
        pass

    def slice_expired(self, cpu):
        """True if the job on `cpu` has used up its time slice; never for unsliced policies."""
        return False

    def on_slice_expired(self, sim, cpu):
        """Hook invoked when slice_expired() reports an exhausted slice."""
        pass

    def try_schedule(self, sim):
        """
        Fill the available CPUs from the ready queue.

        Preemptive policies rank residents and waiting jobs together and keep the
        best k (k = available CPUs); residents that drop out of the top k go back
        to the ready queue. Resident jobs that stay never migrate. Newly selected
        jobs are placed in rank order, each on the lowest-index free CPU that
        needs no switch overhead for it, or else on the lowest-index free CPU
        (which then enters overhead while the job stays queued).

        Args:
            sim: Simulator instance
        """
        cpus = sim.available_cpus()
        if not cpus:
            return

        if self.preemptive:
            residents = [cpu.job for cpu in cpus if cpu.job is not None]
            ranked = sorted(residents + list(sim.ready), key=self.priority)
            chosen = ranked[:len(cpus)]
            chosen_ids = {s.jid for s in chosen}
            for cpu in cpus:
                if cpu.job is not None and cpu.job.jid not in chosen_ids:
                    sim.preempt(cpu)
            resident_ids = {s.jid for s in residents}
            waiting = [s for s in chosen if s.jid not in resident_ids]
        else:
            waiting = list(sim.ready)

        free = [cpu for cpu in cpus if cpu.job is None]
        for state in waiting:
            if not free:
                break
            # prefer a CPU that owes no switch overhead for this job
            cpu = next((c for c in free if not sim.needs_overhead(c, state)), free[0])
            free.remove(cpu)
            sim.dispatch(cpu, state)
