from enum import Enum
from typing import NamedTuple

import numpy as np

from simulator.errors import ConfigurationError, ExecutionError

# Tape symbols print as one decimal digit each
MAX_SYMBOLS = 9


class Move(Enum):
    LEFT = 0
    RIGHT = 1

    @classmethod
    def parse(cls, text):
        """Parse a move field: 'L' or 'R', case-insensitive."""
        value = text.strip().upper()
        if value == "L":
            return cls.LEFT
        if value == "R":
            return cls.RIGHT
        raise ConfigurationError(f"Invalid move direction {text!r}, expected 'L' or 'R'.")

    @property
    def offset(self):
        return 1 if self is Move.RIGHT else -1

    def __str__(self):
        return "R" if self is Move.RIGHT else "L"


class Transition(NamedTuple):
    next_state: int
    write_symbol: int
    move: Move


def parse_transition(line):
    """Parse one "nextState,writeSymbol,move" transition line."""
    parts = line.strip().split(",")
    if len(parts) != 3:
        raise ConfigurationError(
            f"Transition {line.strip()!r} must have 3 comma-separated fields, got {len(parts)}."
        )
    try:
        next_state = int(parts[0].strip())
        write_symbol = int(parts[1].strip())
    except ValueError:
        raise ConfigurationError(f"Transition {line.strip()!r} has a non-integer field.") from None
    return Transition(next_state, write_symbol, Move.parse(parts[2]))


class TransitionTable:
    """
    Immutable (state, symbol) -> Transition lookup for all non-halting states.

    Transitions are given in file order: grouped by state, then by
    read symbol ascending from 0 (blank) to num_symbols. The dense form is a
    frozen numpy array of (next_state, write_symbol, dir_bit) rows; lookups go
    through a nested tuple of Transition values built from it once.
    """

    def __init__(self, num_states, num_symbols, transitions):
        if num_states < 1:
            raise ConfigurationError(f"Number of states must be at least 1, got {num_states}.")
        if not 1 <= num_symbols <= MAX_SYMBOLS:
            raise ConfigurationError(
                f"Number of symbols must be between 1 and {MAX_SYMBOLS}, got {num_symbols}."
            )

        self.num_states = num_states
        self.num_symbols = num_symbols

        transitions = list(transitions)
        expected = (num_states - 1) * self.tape_alphabet_size
        if len(transitions) != expected:
            raise ConfigurationError(
                f"Expected {expected} transitions for {num_states} states and "
                f"{num_symbols} symbols, got {len(transitions)}."
            )

        self._validate(transitions)
        arr = np.array(
            [(t.next_state, t.write_symbol, t.move.value) for t in transitions],
            dtype=np.int64,
        ).reshape(num_states - 1, self.tape_alphabet_size, 3)
        arr.flags.writeable = False
        self._array = arr

        self._rows = tuple(
            tuple(
                Transition(int(next_state), int(write_symbol), Move(int(dir_bit)))
                for next_state, write_symbol, dir_bit in row
            )
            for row in arr
        )

    @classmethod
    def from_specs(cls, num_states, num_symbols, lines):
        return cls(num_states, num_symbols, [parse_transition(line) for line in lines])

    @classmethod
    def from_array(cls, arr):
        """Rebuild a table from the output of serialize()."""
        arr = np.asarray(arr)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ConfigurationError(f"Transition array must have shape (states-1, symbols+1, 3), got {arr.shape}.")
        try:
            transitions = [
                Transition(int(n), int(w), Move(int(d)))
                for n, w, d in arr.reshape(-1, 3)
            ]
        except ValueError as e:
            raise ConfigurationError(f"Transition array holds an invalid direction bit: {e}") from None
        return cls(arr.shape[0] + 1, arr.shape[1] - 1, transitions)

    def _validate(self, transitions):
        for i, t in enumerate(transitions):
            state, symbol = divmod(i, self.tape_alphabet_size)
            if not 0 <= t.next_state < self.num_states:
                raise ConfigurationError(
                    f"Transition for state {state}, symbol {symbol}: next state "
                    f"{t.next_state} is outside [0, {self.num_states})."
                )
            if not 0 <= t.write_symbol <= self.num_symbols:
                raise ConfigurationError(
                    f"Transition for state {state}, symbol {symbol}: write symbol "
                    f"{t.write_symbol} is outside [0, {self.num_symbols}]."
                )

    @property
    def halting_state(self):
        return self.num_states - 1

    @property
    def tape_alphabet_size(self):
        return self.num_symbols + 1

    def get(self, state, symbol):
        if not 0 <= state < self.halting_state or not 0 <= symbol <= self.num_symbols:
            raise ExecutionError(f"No transition for state {state}, symbol {symbol}.")
        return self._rows[state][symbol]

    def serialize(self):
        return self._array.copy()

    def __iter__(self):
        for state, row in enumerate(self._rows):
            for symbol, transition in enumerate(row):
                yield state, symbol, transition

    def __len__(self):
        return len(self._rows) * self.tape_alphabet_size

    def __eq__(self, other):
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return (self.num_states, self.num_symbols) == (other.num_states, other.num_symbols) \
            and np.array_equal(self._array, other._array)

    def __repr__(self):
        return f"TransitionTable(num_states={self.num_states}, num_symbols={self.num_symbols})"
