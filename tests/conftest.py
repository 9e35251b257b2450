"""Shared pytest fixtures for simulator tests."""

from pathlib import Path

import pytest

from simulator.transition_table import TransitionTable

MACHINES_DIR = Path(__file__).parent.parent / "machines"


def machine_text(num_states, num_symbols, rows, input_string=""):
    """Render a machine file from "next,write,move" rows."""
    lines = [str(num_states), str(num_symbols), *rows, input_string]
    return "\n".join(lines) + "\n"


# =============================================================================
# Transition Tables
# =============================================================================


@pytest.fixture
def unary_increment_table() -> TransitionTable:
    """Walk right over 1s, write a 1 on the first blank and halt."""
    return TransitionTable.from_specs(2, 1, ["1,1,R", "0,1,R"])


@pytest.fixture
def immediate_halt_table() -> TransitionTable:
    """Single state: the start state is already the halting state."""
    return TransitionTable(1, 1, [])


@pytest.fixture
def busy_beaver_2_table() -> TransitionTable:
    """2-state busy beaver: 6 steps, four 1s."""
    return TransitionTable.from_specs(3, 1, ["1,1,R", "1,1,L", "0,1,L", "2,1,R"])


@pytest.fixture
def left_walker_table() -> TransitionTable:
    """Walks left past the input start, leaving 1 0 2 in front of it."""
    return TransitionTable.from_specs(4, 2, [
        "1,2,L", "0,1,L", "0,2,L",
        "2,0,L", "2,0,L", "2,0,L",
        "3,1,R", "3,1,R", "3,1,R",
    ])


@pytest.fixture
def write_then_erase_table() -> TransitionTable:
    """Writes a 1 at position 0, steps away and back, then erases it."""
    return TransitionTable.from_specs(4, 1, [
        "1,1,R", "3,1,R",
        "2,0,L", "3,1,R",
        "3,0,R", "3,0,R",
    ])


@pytest.fixture
def runs_forever_table() -> TransitionTable:
    """Moves right forever."""
    return TransitionTable.from_specs(2, 1, ["0,0,R", "0,1,R"])


# =============================================================================
# Machine Files
# =============================================================================


@pytest.fixture
def write_machine(tmp_path):
    """Factory writing a machine file into tmp_path and returning its path."""
    def _write(text, name="machine.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
