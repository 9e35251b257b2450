# tools/machine_parser.py

from dataclasses import dataclass
from pathlib import Path

from simulator.errors import ConfigurationError
from simulator.transition_table import MAX_SYMBOLS, TransitionTable, parse_transition


@dataclass(frozen=True)
class MachineDescription:
    num_states: int
    num_symbols: int
    transitions: TransitionTable
    input_string: str


def _parse_count(lines, index, name):
    if index >= len(lines):
        raise ConfigurationError(f"Line {index + 1}: missing {name}.")
    try:
        return int(lines[index].strip())
    except ValueError:
        raise ConfigurationError(f"Line {index + 1}: {name} must be an integer, got {lines[index].strip()!r}.") from None


def parse_machine(text):
    """
    Parse a machine file:

        numStates
        numSymbols
        (numStates-1) * (numSymbols+1) lines of "nextState,writeSymbol,move"
        input string (optional)

    Only the line right after the table is the input. Further non-blank
    lines are rejected.
    """
    lines = text.splitlines()

    num_states = _parse_count(lines, 0, "number of states")
    num_symbols = _parse_count(lines, 1, "number of symbols")
    if num_states < 1:
        raise ConfigurationError(f"Line 1: number of states must be at least 1, got {num_states}.")
    if not 1 <= num_symbols <= MAX_SYMBOLS:
        raise ConfigurationError(
            f"Line 2: number of symbols must be between 1 and {MAX_SYMBOLS}, got {num_symbols}."
        )

    num_transitions = (num_states - 1) * (num_symbols + 1)
    first, last = 2, 2 + num_transitions
    if len(lines) < last:
        raise ConfigurationError(
            f"Expected {num_transitions} transition lines, file ended after {max(len(lines) - first, 0)}."
        )

    transitions = []
    for lineno in range(first, last):
        try:
            transitions.append(parse_transition(lines[lineno]))
        except ConfigurationError as e:
            raise ConfigurationError(f"Line {lineno + 1}: {e}") from None

    table = TransitionTable(num_states, num_symbols, transitions)

    input_string = lines[last].strip() if len(lines) > last else ""
    for lineno in range(last + 1, len(lines)):
        if lines[lineno].strip():
            raise ConfigurationError(
                f"Line {lineno + 1}: unexpected content after the input line: {lines[lineno].strip()!r}."
            )

    return MachineDescription(num_states, num_symbols, table, input_string)


def load_machine(path):
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Machine file not found at: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Machine file {path} is not UTF-8 text: {e}") from None
    return parse_machine(text)
