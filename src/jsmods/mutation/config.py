"""
Configuration for structural editing (mutation).

Contains layout settings for the object printer and external formatter configurations.
"""

import os

from jsmods.exceptions import ConfigError


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{raw}'")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def get_mutation_config():
    """
    Get mutation configuration with environment overrides.

    Overrides are resolved at call time so tests and the CLI can adjust them.
    """
    return {
        "prettier_command": os.getenv("JSMODS_PRETTIER", "prettier"),
        "formatter_timeout": _int_from_env("JSMODS_FORMATTER_TIMEOUT", 30),
        "max_inline_width": _int_from_env("JSMODS_MAX_INLINE_WIDTH", LAYOUT["max_inline_width"]),
        "validate_output": True,
    }


FORMATTERS = {
    "javascript": {
        "command": "prettier",
        "args": ["--parser", "babel"],
        "extensions": [".js", ".jsx"],
    },
    "typescript": {
        "command": "prettier",
        "args": ["--parser", "typescript"],
        "extensions": [".ts", ".tsx"],
    },
    "css": {
        "command": "prettier",
        "args": ["--parser", "css"],
        "extensions": [".css"],
    },
}

LAYOUT = {
    "max_inline_width": 80,    # Columns before an edited object breaks onto lines
}

INDENT_DETECTION = {
    "default_indent": "  ",    # 2 spaces
    "max_sample_lines": 100,   # Lines to sample for indent detection
}

