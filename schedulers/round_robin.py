from jobs import EPSILON
from .base import Scheduler


class RoundRobin(Scheduler):
    """
    Round Robin scheduler with a fixed time quantum.

    Jobs are served first-come first-served from a FIFO ready queue. A CPU keeps its
    job until the job completes or `quantum` time has passed since the CPU accepted
    it; an unfinished job then goes to the back of the queue, behind every job that
    is already waiting.
    """

    name = "RR"
    uses_time_slice = True

    def __init__(self, quantum):
        self.quantum = quantum

    def priority(self, state):
        return (state.enqueue_seq,)

    def slice_expired(self, cpu):
        return cpu.job is not None and cpu.slice_left <= EPSILON

    def on_slice_expired(self, sim, cpu):
        state = sim.release(cpu)
        sim.enqueue(state)
        sim.log(f"Job {state.jid} quantum expired on CPU {cpu.index}, requeued "
                f"(remaining={state.remaining:.2f})")
