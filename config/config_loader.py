import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "program_file": "programs/binary_increment.txt",
    "initial_tape": "",
    "full_speed": False,
    "step_interval": 0.05,
    "full_speed_interval": 0.01,
    "full_speed_batch": 25,
    "tape_window": 0,
    "max_steps": 0,
    "debug_level": 1,
    "output_directory": "logs/",
    "log_file_prefix": "turing_"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "program_file": str,
    "initial_tape": str,
    "full_speed": bool,
    "step_interval": (int, float),
    "full_speed_interval": (int, float),
    "full_speed_batch": int,
    "tape_window": int,
    "max_steps": int,
    "debug_level": int,
    "output_directory": str,
    "log_file_prefix": str
}

DEFAULT_CONFIG_PATH = "config/runtime_config.json"

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        value = config[key]
        # bool is an int subclass; only accept it where a bool is expected
        if isinstance(value, bool) and expected_type is not bool:
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")
        if not isinstance(value, expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    for key in ("step_interval", "full_speed_interval", "tape_window", "max_steps"):
        if config[key] < 0:
            raise ValueError(f"Config key '{key}' must not be negative.")
    if config["full_speed_batch"] < 1:
        raise ValueError("Config key 'full_speed_batch' must be at least 1.")

def load_config(path=DEFAULT_CONFIG_PATH, verbose=False):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    # Validate schema
    validate_config(config)

    # Validate output directory
    os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config

def save_config(config, path=DEFAULT_CONFIG_PATH):
    validate_config(config)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
