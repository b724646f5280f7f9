"""
jsmods - Structural codemods for JavaScript and CSS

Import management, LiveSocket hook editing, object-literal extension,
statistics and formatting checks over source text or files.
"""

__version__ = "0.1.0"

# Core exports
from jsmods.facade import CodemodFacade
from jsmods.parser import parse, parse_stylesheet
from jsmods.statistics import statistics
from jsmods.schemas import OperationResult, StatisticsReport
from jsmods.exceptions import (
    JsModsError,
    ParseError,
    StructureNotFound,
    InvalidInput,
    FormatterError,
    ConfigError,
)

__all__ = [
    "__version__",
    "CodemodFacade",
    "parse",
    "parse_stylesheet",
    "statistics",
    "OperationResult",
    "StatisticsReport",
    "JsModsError",
    "ParseError",
    "StructureNotFound",
    "InvalidInput",
    "FormatterError",
    "ConfigError",
]
