from .base import Scheduler


class SRTN(Scheduler):
    """
    Shortest Remaining Time Next scheduler (preemptive).

    At every assignment point the jobs with the least remaining work hold the CPUs.
    Ties are broken by earliest arrival, then by job id, so the order is total and
    runs are reproducible.
    """

    name = "SRTN"
    preemptive = True

    def priority(self, state):
        # round away float noise so equal remaining times tie
        return (round(state.remaining, 6), state.arrival, state.jid)
