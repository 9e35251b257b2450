class SimulatorError(Exception):
    """Base class for every failure raised by the simulator."""


class ConfigurationError(SimulatorError, ValueError):
    """The machine description, input string or runtime config is malformed."""


class ExecutionError(SimulatorError, RuntimeError):
    """A run hit an internal inconsistency, e.g. a missing transition."""


class BudgetExceededError(SimulatorError, RuntimeError):
    """The run was stopped by a step or wall-clock budget before halting."""

    def __init__(self, reason, steps, symbols=None, elapsed=0.0):
        super().__init__(f"Run stopped after {steps:,} steps: {reason}")
        self.reason = reason
        self.steps = steps
        self.elapsed = elapsed
        # Diagnostic snapshot only, never valid output
        self.symbols = symbols or []
