"""
Exceptions raised by the scheduling engine.

Two families:
- ScheduleValidationError: bad input, raised before any simulated time passes
- SimulationError: an internal invariant broke mid-run (a defect, not a user error)
"""


class ScheduleValidationError(ValueError):
    """
    Raised when a run is requested with invalid input.

    Every violated constraint is collected so the caller sees all of them at once.

    Args:
        reasons: List of human-readable messages, one per violated constraint
    """

    def __init__(self, reasons):
        self.reasons = list(reasons)
        super().__init__("; ".join(self.reasons))


class SimulationError(RuntimeError):
    """Raised when the simulation loop detects an inconsistent state."""
