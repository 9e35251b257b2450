# app.py

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from config.config_loader import load_config
from logger.logger import JSONLogger, run_entry
from simulator.errors import BudgetExceededError, ConfigurationError, ExecutionError
from simulator.turing_machine import TuringMachine
from tools.machine_parser import load_machine
from tools.table_inspect import build_table
from tools.tape_output import format_tape

# Exit codes
EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
# 2 is taken by argparse usage errors
EXIT_BUDGET_EXCEEDED = 3
EXIT_EXECUTION_ERROR = 4

console = Console(stderr=True)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="tmsim",
        description="Simulate a deterministic Turing Machine on a bi-infinite tape.",
    )
    parser.add_argument("input_file", help="Machine description file (states, symbols, transitions, input)")
    parser.add_argument("--config", help="Path to a JSON runtime config")
    parser.add_argument("--max-steps", type=int, help="Stop with an error after this many steps")
    parser.add_argument("--time-limit", type=float, help="Stop with an error after this many seconds")
    parser.add_argument("--trace", action="store_true", default=None, help="Print the tape after every step (stderr)")
    parser.add_argument("--table", action="store_true", help="Print the transition table before running (stderr)")
    parser.add_argument("--timing", action="store_true", default=None, help="Report simulation time (stderr)")
    parser.add_argument("--log", action="store_true", default=None, help="Append a JSON record of the run to the log directory")
    return parser


def error(message):
    console.print(f"[red]Error: {escape(str(message))}[/red]", highlight=False, soft_wrap=True)


def run(args):
    config = load_config(args.config, overrides={
        "max_steps": args.max_steps,
        "time_limit": args.time_limit,
        "trace": args.trace,
        "report_timing": args.timing,
        "log_runs": args.log,
    })

    description = load_machine(args.input_file)
    machine = TuringMachine(description.transitions, description.input_string)
    run_logger = JSONLogger(config["output_directory"], config["log_file_prefix"]) if config["log_runs"] else None

    if args.table:
        console.print(build_table(description.transitions))

    on_step = None
    if config["trace"]:
        window = config["trace_window"]
        console.print(machine.visualize(window), markup=False, highlight=False, soft_wrap=True)

        def on_step(tm):
            console.print(tm.visualize(window), markup=False, highlight=False, soft_wrap=True)

    try:
        result = machine.run(max_steps=config["max_steps"], time_limit=config["time_limit"], on_step=on_step)
    except BudgetExceededError as e:
        if run_logger:
            entry = run_entry(description, "budget_exceeded", e.steps, e.elapsed, input_path=args.input_file)
            run_logger.log(entry)
            run_logger.log_non_halting([entry])
        raise

    if config["report_timing"]:
        console.print(f"Simulation time: {result.elapsed * 1000:.0f}ms ({result.steps:,} steps)", highlight=False, soft_wrap=True)

    if run_logger:
        entry = run_entry(description, "halted", result.steps, result.elapsed, result=result, input_path=args.input_file)
        run_logger.log(entry)
        run_logger.log_halting([entry])

    print(format_tape(result))


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        run(args)
    except (ConfigurationError, OSError) as e:
        error(e)
        return EXIT_CONFIG_ERROR
    except ExecutionError as e:
        error(e)
        return EXIT_EXECUTION_ERROR
    except BudgetExceededError as e:
        error(e)
        return EXIT_BUDGET_EXCEEDED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
