import time
from dataclasses import dataclass, field

from simulator.errors import BudgetExceededError, ConfigurationError

# Steps between wall-clock checks when a time limit is set
TIME_CHECK_INTERVAL = 4096

DIGITS = "0123456789"


@dataclass
class ExecutionState:
    """Mutable simulation state, owned by exactly one run."""
    current_state: int = 0
    head_position: int = 0
    min_visited: int = 0
    max_visited: int = 0
    steps: int = 0
    # position -> symbol, blanks (0) are never stored
    tape: dict = field(default_factory=dict)

    @classmethod
    def initial(cls, input_string, num_symbols):
        tape = {}
        for pos, char in enumerate(input_string):
            if char not in DIGITS or int(char) > num_symbols:
                raise ConfigurationError(
                    f"Input symbol {char!r} at position {pos} is not in [0, {num_symbols}]."
                )
            symbol = int(char)
            if symbol != 0:
                tape[pos] = symbol
        max_visited = len(input_string) - 1 if input_string else 0
        return cls(max_visited=max_visited, tape=tape)

    def read(self):
        return self.tape.get(self.head_position, 0)

    def symbols(self):
        """Symbols from min_visited to max_visited inclusive, blanks as 0."""
        return [self.tape.get(pos, 0) for pos in range(self.min_visited, self.max_visited + 1)]


def step(table, execution):
    """Apply one transition to `execution` in place and return it."""
    head = execution.head_position
    transition = table.get(execution.current_state, execution.read())

    if transition.write_symbol == 0:
        execution.tape.pop(head, None)
    else:
        execution.tape[head] = transition.write_symbol

    head += transition.move.offset
    execution.head_position = head
    if head < execution.min_visited:
        execution.min_visited = head
    elif head > execution.max_visited:
        execution.max_visited = head

    execution.current_state = transition.next_state
    execution.steps += 1
    return execution


@dataclass(frozen=True)
class RunResult:
    symbols: tuple
    steps: int
    head_position: int
    min_visited: int
    max_visited: int
    final_state: int
    elapsed: float


class TuringMachine:
    def __init__(self, table, input_string=""):
        self.table = table
        self.input_string = input_string
        self.state = ExecutionState.initial(input_string, table.num_symbols)

    @property
    def halted(self):
        return self.state.current_state == self.table.halting_state

    def step(self):
        if self.halted:
            return self.state
        return step(self.table, self.state)

    def run(self, max_steps=None, time_limit=None, on_step=None):
        """
        Step until the halting state is reached.

        Termination is not guaranteed. `max_steps` and `time_limit` (seconds)
        are optional budgets; exceeding either raises BudgetExceededError.
        `on_step` is called with this machine after every step.
        """
        table = self.table
        execution = self.state
        halting_state = table.halting_state
        start = time.monotonic()
        deadline = start + time_limit if time_limit is not None else None

        while execution.current_state != halting_state:
            if max_steps is not None and execution.steps >= max_steps:
                raise BudgetExceededError(
                    f"exceeded step budget of {max_steps:,}", execution.steps, execution.symbols(),
                    time.monotonic() - start,
                )
            if deadline is not None and execution.steps % TIME_CHECK_INTERVAL == 0 \
                    and time.monotonic() >= deadline:
                raise BudgetExceededError(
                    f"exceeded time budget of {time_limit}s", execution.steps, execution.symbols(),
                    time.monotonic() - start,
                )
            step(table, execution)
            if on_step is not None:
                on_step(self)

        return self.result(time.monotonic() - start)

    def result(self, elapsed=0.0):
        execution = self.state
        return RunResult(
            symbols=tuple(execution.symbols()),
            steps=execution.steps,
            head_position=execution.head_position,
            min_visited=execution.min_visited,
            max_visited=execution.max_visited,
            final_state=execution.current_state,
            elapsed=elapsed,
        )

    def visited_symbols(self):
        return self.state.symbols()

    def reset(self):
        self.state = ExecutionState.initial(self.input_string, self.table.num_symbols)

    def visualize(self, window=3):
        """Display the visited range plus `window` cells each side, caret under the head."""
        execution = self.state
        tape_range = range(execution.min_visited - window, execution.max_visited + window + 1)

        tape_str = ""
        head_str = ""
        for pos in tape_range:
            symbol = str(execution.tape.get(pos, 0))
            tape_str += f"{symbol} "
            marker = "^" if pos == execution.head_position else " "
            head_str += marker.ljust(len(symbol)) + " "
        return "\n".join([
            tape_str.rstrip(),
            head_str.rstrip(),
            f"State: {execution.current_state}, Step: {execution.steps}, Halted: {self.halted}",
        ])
