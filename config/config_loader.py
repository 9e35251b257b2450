import json
import os

from simulator.errors import ConfigurationError

DEFAULT_CONFIG = {
    "max_steps": None,
    "time_limit": None,
    "trace": False,
    "trace_window": 3,
    "log_runs": False,
    "report_timing": False,
    "output_directory": "logs/",
    "log_file_prefix": "tmsim_",
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": (int, type(None)),
    "time_limit": (int, float, type(None)),
    "trace": bool,
    "trace_window": int,
    "log_runs": bool,
    "report_timing": bool,
    "output_directory": str,
    "log_file_prefix": str,
}


def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ConfigurationError(f"Missing required configuration key: {key}")
        value = config[key]
        # bool is an int subclass, only accept it where bool is expected
        if not isinstance(value, expected_type) or (isinstance(value, bool) and expected_type is not bool):
            raise ConfigurationError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    unknown = set(config) - set(CONFIG_SCHEMA)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    # Budgets
    if config["max_steps"] is not None and config["max_steps"] < 0:
        raise ConfigurationError(f"max_steps must be non-negative, got {config['max_steps']}.")
    if config["time_limit"] is not None and config["time_limit"] <= 0:
        raise ConfigurationError(f"time_limit must be positive, got {config['time_limit']}.")
    if config["trace_window"] < 0:
        raise ConfigurationError(f"trace_window must be non-negative, got {config['trace_window']}.")


def load_config(path=None, overrides=None):
    """Merge a JSON config file and explicit overrides over DEFAULT_CONFIG."""
    config = DEFAULT_CONFIG.copy()

    if path is not None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found at: {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                user_config = json.load(f)
            except UnicodeDecodeError as e:
                raise ConfigurationError(f"Configuration file {path} is not UTF-8 text: {e}") from None
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Configuration file {path} is not valid JSON: {e}") from None
        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration file {path} must hold a JSON object.")
        config.update(user_config)

    if overrides:
        config.update({key: value for key, value in overrides.items() if value is not None})

    validate_config(config)
    return config
