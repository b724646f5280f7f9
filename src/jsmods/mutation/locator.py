"""
Structural matchers: read-only queries over a parsed Program.

Locates imports, the LiveSocket call site, top-level variables and object
properties. Nothing here edits text.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from jsmods.logging_config import logger
from jsmods.config import LIVE_SOCKET
from jsmods.parser.ast import (
    ImportDeclaration,
    NodeKind,
    ObjectExpression,
    Program,
    PropertyEntry,
    VariableDeclarator,
)

_WHITESPACE = re.compile(r"\s+")


def normalize_import(raw: str) -> str:
    """Collapse whitespace and drop the trailing semicolon of an import statement."""
    return _WHITESPACE.sub(" ", raw).strip().rstrip(";").strip()


class ImportMatcher:
    """
    Match import declarations against a target.

    A target is either a bare module path ("phoenix_live_view") or the
    normalized text of one full import statement.
    """

    def __init__(self, module_paths: List[str], snippets: List[str]):
        self.module_paths = set(module_paths)
        self.snippets = {normalize_import(snippet) for snippet in snippets}

    def matches(self, declaration: ImportDeclaration) -> bool:
        if declaration.source in self.module_paths:
            return True
        return normalize_import(declaration.raw) in self.snippets


def find_imports(program: Program, matcher: ImportMatcher) -> List[ImportDeclaration]:
    """All top-level import declarations accepted by `matcher`, in source order."""
    return [declaration for declaration in program.imports if matcher.matches(declaration)]


def find_variable(program: Program, name: str) -> Optional[VariableDeclarator]:
    """First top-level variable declarator named `name`."""
    for declarator in program.declarators:
        if declarator.name == name:
            return declarator
    return None


def find_property(obj: ObjectExpression, name: str) -> Optional[PropertyEntry]:
    return obj.find_entry(name)


class LiveSocketState(str, Enum):
    """Where a LiveSocket call site stands relative to its hooks object."""
    NO_LIVE_SOCKET = "no_live_socket"
    NO_OPTIONS_OBJECT = "no_options_object"
    NO_HOOKS_KEY = "no_hooks_key"
    HOOKS_NOT_OBJECT = "hooks_not_object"
    HAS_HOOKS_KEY = "has_hooks_key"


@dataclass
class LiveSocketSite:
    """Resolved LiveSocket call site."""
    state: LiveSocketState
    declarator: Optional[VariableDeclarator] = None
    options: Optional[ObjectExpression] = None
    hooks_entry: Optional[PropertyEntry] = None

    @property
    def hooks(self) -> Optional[ObjectExpression]:
        if self.state == LiveSocketState.HAS_HOOKS_KEY:
            return self.hooks_entry.value
        return None


def _is_live_socket_construction(declarator: VariableDeclarator) -> bool:
    init = declarator.init
    if init is None or init.kind != NodeKind.NEW_EXPRESSION or not init.callee:
        return False
    constructor = LIVE_SOCKET["constructor"]
    return init.callee == constructor or init.callee.endswith("." + constructor)


def find_live_socket(program: Program) -> Optional[VariableDeclarator]:
    """
    Locate the LiveSocket declaration.

    Prefers a declarator initialized with `new LiveSocket(...)`; falls back to a
    declarator named `liveSocket` whatever its initializer.
    """
    constructions = [d for d in program.declarators if _is_live_socket_construction(d)]
    if constructions:
        if len(constructions) > 1:
            logger.warning(f"Found {len(constructions)} LiveSocket constructions, using the first")
        return constructions[0]
    return find_variable(program, LIVE_SOCKET["variable"])


def resolve_live_socket(program: Program) -> LiveSocketSite:
    """Walk the LiveSocket state machine as far as the source allows."""
    declarator = find_live_socket(program)
    if declarator is None:
        return LiveSocketSite(LiveSocketState.NO_LIVE_SOCKET)

    init = declarator.init
    options = init.options_object() if init is not None and init.kind == NodeKind.NEW_EXPRESSION else None
    if options is None:
        return LiveSocketSite(LiveSocketState.NO_OPTIONS_OBJECT, declarator)

    hooks_entry = find_property(options, LIVE_SOCKET["hooks_key"])
    if hooks_entry is None:
        return LiveSocketSite(LiveSocketState.NO_HOOKS_KEY, declarator, options)

    if not isinstance(hooks_entry.value, ObjectExpression):
        return LiveSocketSite(LiveSocketState.HOOKS_NOT_OBJECT, declarator, options, hooks_entry)

    return LiveSocketSite(LiveSocketState.HAS_HOOKS_KEY, declarator, options, hooks_entry)
