import pytest

from simulator.errors import BudgetExceededError, ConfigurationError
from simulator.transition_table import TransitionTable
from simulator.turing_machine import ExecutionState, TuringMachine, step
from tools.tape_output import format_tape


class RecordingTable:
    """Wraps a TransitionTable and records every lookup."""

    def __init__(self, table):
        self.table = table
        self.lookups = []

    def __getattr__(self, name):
        return getattr(self.table, name)

    def get(self, state, symbol):
        self.lookups.append((state, symbol))
        return self.table.get(state, symbol)


# =============================================================================
# Initial state
# =============================================================================


class TestInitialState:
    def test_input_placed_from_position_zero(self):
        execution = ExecutionState.initial("1201", 2)

        assert execution.tape == {0: 1, 1: 2, 3: 1}
        assert (execution.min_visited, execution.max_visited) == (0, 3)
        assert execution.head_position == 0
        assert execution.current_state == 0

    def test_empty_input_visits_position_zero(self):
        execution = ExecutionState.initial("", 1)

        assert execution.tape == {}
        assert (execution.min_visited, execution.max_visited) == (0, 0)
        assert execution.symbols() == [0]

    @pytest.mark.parametrize("input_string", ["12", "1a", "1 1", "-1"])
    def test_rejects_invalid_input_symbols(self, input_string):
        with pytest.raises(ConfigurationError):
            ExecutionState.initial(input_string, 1)


# =============================================================================
# Scenarios
# =============================================================================


def test_halts_after_one_step():
    table = TransitionTable.from_specs(2, 1, ["1,1,R", "1,1,R"])

    result = TuringMachine(table, "1").run()

    assert result.steps == 1
    assert result.final_state == 1
    assert format_tape(result) == "10"


def test_single_symbol_input(unary_increment_table):
    result = TuringMachine(unary_increment_table, "1").run()

    # Steps over the 1, writes a 1 on the blank and moves past it
    assert result.steps == 2
    assert format_tape(result) == "110"


def test_unary_increment(unary_increment_table):
    result = TuringMachine(unary_increment_table, "111").run()

    assert result.steps == 4
    assert result.head_position == 4
    assert format_tape(result) == "11110"


def test_immediate_halt_empty_input(immediate_halt_table):
    machine = TuringMachine(immediate_halt_table, "")
    assert machine.halted

    result = machine.run()

    assert result.steps == 0
    assert format_tape(result) == "0"


def test_immediate_halt_keeps_input(immediate_halt_table):
    result = TuringMachine(immediate_halt_table, "101").run()
    assert format_tape(result) == "101"


def test_negative_positions_print_left_to_right(left_walker_table):
    result = TuringMachine(left_walker_table, "111").run()

    assert (result.min_visited, result.max_visited) == (-3, 2)
    assert result.head_position == -2
    assert result.steps == 4
    assert format_tape(result) == "102111"


def test_write_then_erase(write_then_erase_table):
    machine = TuringMachine(write_then_erase_table, "")

    machine.step()
    assert machine.state.tape == {0: 1}

    machine.step()
    machine.step()
    assert machine.halted
    assert machine.state.tape == {}
    assert machine.state.tape.get(0, 0) == 0
    assert machine.visited_symbols() == [0, 0]


def test_busy_beaver_2(busy_beaver_2_table):
    result = TuringMachine(busy_beaver_2_table).run()

    assert result.steps == 6
    assert result.final_state == 2
    assert format_tape(result) == "1111"


# =============================================================================
# Invariants
# =============================================================================


def test_deterministic(busy_beaver_2_table, left_walker_table):
    for table, input_string in [(busy_beaver_2_table, ""), (left_walker_table, "121")]:
        first = TuringMachine(table, input_string).run()
        second = TuringMachine(table, input_string).run()
        assert first.symbols == second.symbols
        assert first.steps == second.steps


def test_tape_never_stores_blanks(write_then_erase_table, left_walker_table):
    def check(tm):
        assert 0 not in tm.state.tape.values()

    TuringMachine(write_then_erase_table).run(on_step=check)
    TuringMachine(left_walker_table, "1021").run(on_step=check)


def test_bounds_are_true_extrema(busy_beaver_2_table):
    positions = [0]

    def record(tm):
        positions.append(tm.state.head_position)
        assert tm.state.min_visited <= tm.state.head_position <= tm.state.max_visited

    result = TuringMachine(busy_beaver_2_table).run(on_step=record)

    assert result.min_visited == min(positions)
    assert result.max_visited == max(positions)
    assert len(result.symbols) == result.max_visited - result.min_visited + 1


def test_halting_state_never_looked_up(busy_beaver_2_table):
    table = RecordingTable(busy_beaver_2_table)
    machine = TuringMachine(table)

    machine.run()

    assert len(table.lookups) == 6
    assert all(state != busy_beaver_2_table.halting_state for state, _ in table.lookups)


def test_step_function_mutates_owned_state(unary_increment_table):
    execution = ExecutionState.initial("1", 1)

    returned = step(unary_increment_table, execution)

    assert returned is execution
    assert execution.head_position == 1
    assert execution.steps == 1
    assert execution.current_state == 0


def test_step_after_halt_is_a_no_op(unary_increment_table):
    machine = TuringMachine(unary_increment_table, "")
    machine.run()
    before = machine.result()

    machine.step()

    assert machine.result() == before


def test_reset(unary_increment_table):
    machine = TuringMachine(unary_increment_table, "11")
    machine.run()

    machine.reset()

    assert machine.state == ExecutionState.initial("11", 1)


# =============================================================================
# Budgets
# =============================================================================


def test_step_budget(runs_forever_table):
    machine = TuringMachine(runs_forever_table, "1")

    with pytest.raises(BudgetExceededError) as excinfo:
        machine.run(max_steps=100)

    assert excinfo.value.steps == 100
    assert len(excinfo.value.symbols) == 101
    assert machine.state.steps == 100


def test_step_budget_not_hit_by_halting_run(busy_beaver_2_table):
    result = TuringMachine(busy_beaver_2_table).run(max_steps=6)
    assert result.steps == 6


def test_time_budget(runs_forever_table):
    with pytest.raises(BudgetExceededError, match="time budget"):
        TuringMachine(runs_forever_table).run(time_limit=0.05)


def test_visualize(unary_increment_table):
    machine = TuringMachine(unary_increment_table, "1")
    machine.step()

    lines = machine.visualize(window=1).splitlines()

    assert lines[0] == "0 1 0 0"
    assert lines[1] == "^".rjust(5)
    assert lines[2] == "State: 0, Step: 1, Halted: False"
