# tools/table_inspect.py

from rich.table import Table


def format_action(transition):
    """Compact notation: write symbol, move, next state, e.g. "1R2"."""
    return f"{transition.write_symbol}{transition.move}{transition.next_state}"


def build_table(table):
    """State x symbol grid of a TransitionTable; the halting state gets its own row."""
    grid = Table(title="Transition Table", show_header=True, header_style="bold magenta")
    grid.add_column("State", justify="center")
    for symbol in range(table.tape_alphabet_size):
        grid.add_column(f"{symbol}", justify="center")

    row = []
    for state, symbol, transition in table:
        if symbol == 0:
            row = [f"{state}"]
        row.append(format_action(transition))
        if symbol == table.num_symbols:
            grid.add_row(*row)

    grid.add_row(f"{table.halting_state}", *(["[green]HALT[/green]"] * table.tape_alphabet_size))
    return grid
