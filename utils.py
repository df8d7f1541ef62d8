# utils.py
"""
Utility functions for the flow field application.

This module provides helper functions, such as logging setup, config
loading and seed resolution, that are used across different parts of the
application but do not belong to a specific domain like the simulation
or rendering.
"""
import logging
import logging.handlers
import json
import os
import time
from typing import Dict, Any, Optional

from constants import SEED_BITS, CONFIG_SECTIONS, QUIET_LOGGERS

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#   - Invariants: After this function runs, the logging system is
#     initialized and ready for use throughout the application.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed config, validated by validate_config.
#   - Raises: FileNotFoundError, json.JSONDecodeError (logged, re-raised),
#     ValueError for a config that is not an object of object sections.
#
# resolve_seed(configured: Optional[int]) -> int:
#   - Inputs:
#     - configured: The seed from config. None or 0 means "not set".
#   - Outputs: A non-negative integer seed.
#   - Side Effects: Reads the wall clock when no seed is configured.
#   - Invariants: A positive configured seed is returned unchanged.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/flow_field.log')

    # Ensure the log directory exists
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    # Get the root logger
    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    # Console Handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotating File Handler
    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logger.level, logging.WARNING))

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")

def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

    validate_config(config)
    logging.info("Configuration loaded successfully.")
    return config

def validate_config(config: Any) -> None:
    """
    Checks the shape of a loaded config: a JSON object whose known
    sections are themselves objects. Unknown sections are reported and
    ignored.
    """
    if not isinstance(config, dict):
        msg = f"Configuration error: expected a JSON object, got {type(config).__name__}."
        logging.critical(msg)
        raise ValueError(msg)

    for section in CONFIG_SECTIONS:
        if section in config and not isinstance(config[section], dict):
            msg = f"Configuration error: section '{section}' must be a JSON object."
            logging.critical(msg)
            raise ValueError(msg)

    unknown = sorted(set(config) - set(CONFIG_SECTIONS))
    if unknown:
        logging.warning(f"Ignoring unknown configuration sections: {', '.join(unknown)}.")

def resolve_seed(configured: Optional[int] = None) -> int:
    """
    Returns the seed to use for this run.

    A positive configured seed is used as is. Otherwise a seed is derived
    from the high-resolution clock so that repeated runs differ.
    """
    if configured:
        if configured < 0:
            msg = f"Configuration error: seed must be non-negative, got {configured}."
            logging.critical(msg)
            raise ValueError(msg)
        logging.info(f"Using configured seed {configured}.")
        return int(configured)

    seed = time.time_ns() & ((1 << SEED_BITS) - 1)
    logging.info(f"No seed configured. Derived seed {seed} from the system clock.")
    return seed
