#!/usr/bin/env python3

"""Tuning knobs for the declaration front ends."""

import os

# Default configuration values
DEFAULT_CONFIG = {
    # libclang location; empty means let clang.cindex find it
    "LIBCLANG_FILE": "",
    "LIBCLANG_PATH": "",

    # Traversal policy
    "INCLUDE_FORWARD_DECLARATIONS": True,
    "SKIP_FUNCTION_BODIES": False,
}

ENV_PREFIX = "CLASS_VERSION_"


def get_config() -> dict:
    """Get front-end configuration with environment variable overrides.

    Each key can be overridden with ``CLASS_VERSION_<KEY>``; the value is
    converted to the type of the default.

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key in config:
        env_value = os.getenv(f"{ENV_PREFIX}{key}")
        if env_value is None:
            continue
        if isinstance(config[key], bool):
            config[key] = env_value.lower() in ("true", "1", "yes", "on")
        else:
            config[key] = env_value

    return config
