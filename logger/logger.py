import json
import os
from datetime import datetime, timezone


def utc_day():
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def run_entry(description, outcome, steps, elapsed, result=None, input_path=None):
    """Build the JSON record for one simulation run."""
    entry = {
        "input_path": str(input_path) if input_path is not None else None,
        "num_states": description.num_states,
        "num_symbols": description.num_symbols,
        "input_length": len(description.input_string),
        "outcome": outcome,
        "steps": steps,
        "elapsed": round(elapsed, 6),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if result is not None:
        entry["min_visited"] = result.min_visited
        entry["max_visited"] = result.max_visited
        entry["head_position"] = result.head_position
    return entry


class JSONLogger:
    """
    Appends run records as JSON lines, one set of files per UTC day:

        <prefix><day>.jsonl          every run
        halted_<day>.jsonl           runs that reached the halting state
        budget_exceeded_<day>.jsonl  runs stopped by a step or time budget
    """

    def __init__(self, output_directory="logs/", log_file_prefix="tmsim_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.rotate()

    def rotate(self):
        """Point the log files at the current UTC day."""
        self.today = utc_day()
        self.current_log = self._path(self.log_file_prefix)

    def _path(self, prefix):
        return os.path.join(self.output_directory, f"{prefix}{self.today}.jsonl")

    def _append(self, prefix, entries):
        # Runs that cross midnight go to the next day's files
        if utc_day() != self.today:
            self.rotate()
        with open(self._path(prefix), "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        self.log_batch([entry])

    def log_batch(self, entries: list):
        """Append entries to the main run log."""
        self._append(self.log_file_prefix, entries)

    def log_halting(self, entries: list):
        self._append("halted_", entries)

    def log_non_halting(self, entries: list):
        self._append("budget_exceeded_", entries)
