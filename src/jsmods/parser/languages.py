from typing import Dict

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Parser

from jsmods.logging_config import logger
from jsmods.config import validate_script_language

# Global cache for loaded languages to avoid repeated loading.
# Language objects are immutable; Parser objects are not and are built per call.
_language_cache: Dict[str, Language] = {}

_LANGUAGE_LOADERS = {
    "javascript": tsjavascript.language,
    "typescript": tstypescript.language_typescript,
}


def get_language(language_name: str) -> Language:
    """
    Loads a tree-sitter language from its grammar package.

    Caches the loaded language object for efficiency.
    """
    validate_script_language(language_name)

    if language_name in _language_cache:
        return _language_cache[language_name]

    language = Language(_LANGUAGE_LOADERS[language_name]())
    _language_cache[language_name] = language
    logger.debug(f"Successfully loaded language '{language_name}'")
    return language


def new_parser(language_name: str) -> Parser:
    """Build a fresh parser so concurrent calls never share parser state."""
    parser = Parser()
    parser.language = get_language(language_name)
    return parser
