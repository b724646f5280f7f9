"""
Domain AST for the codemod engine.

The tree-sitter tree is lowered into this closed set of node kinds. Only the
shapes the matchers need are modelled in detail; everything else is kept as an
Opaque node with its byte span so it can be copied verbatim when re-emitting.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from tree_sitter import Tree


class NodeKind(str, Enum):
    """Every node kind the engine knows about."""
    PROGRAM = "program"
    IMPORT_DECLARATION = "import_declaration"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    NEW_EXPRESSION = "new_expression"
    OBJECT_EXPRESSION = "object_expression"
    COMMENT = "comment"
    # Statistics-only markers
    FUNCTION = "function"
    CLASS = "class"
    DEBUGGER_STATEMENT = "debugger_statement"
    TRY_STATEMENT = "try_statement"
    THROW_STATEMENT = "throw_statement"
    OPAQUE = "opaque"


class PropertyKind(str, Enum):
    """Kinds of entries inside an object literal."""
    SHORTHAND = "shorthand"   # { Foo }
    SPREAD = "spread"         # { ...Foo }
    KEYED = "keyed"           # { foo: bar }
    METHOD = "method"         # { foo() {} }
    OTHER = "other"           # anything we cannot name


@dataclass(frozen=True)
class Span:
    """Half-open byte range [start, end) into the UTF-8 source."""
    start: int
    end: int

    def slice(self, source: bytes) -> str:
        return source[self.start:self.end].decode("utf-8")


@dataclass
class Opaque:
    span: Span
    kind: NodeKind = NodeKind.OPAQUE


@dataclass
class Comment:
    span: Span
    kind: NodeKind = NodeKind.COMMENT


@dataclass
class PropertyEntry:
    """
    One entry of an object literal.

    Entries parsed from source carry a span and print as their raw text;
    synthesized entries have no span and print from `text`.
    """
    kind: PropertyKind
    name: Optional[str]
    span: Optional[Span] = None
    text: Optional[str] = None
    value: Optional["Expression"] = None
    leading_comments: List[Span] = field(default_factory=list)
    trailing_comment: Optional[Span] = None

    @property
    def identity(self):
        """Dedup key: spreads and keys live in separate namespaces."""
        if self.kind == PropertyKind.SPREAD:
            return (PropertyKind.SPREAD, self.name)
        if self.kind in (PropertyKind.SHORTHAND, PropertyKind.KEYED, PropertyKind.METHOD):
            return (PropertyKind.SHORTHAND, self.name)
        return None


@dataclass
class ObjectExpression:
    """Object literal; a synthesized one has no span."""
    span: Optional[Span]
    entries: List[PropertyEntry] = field(default_factory=list)
    multiline: bool = False
    trailing_comma: bool = False
    dangling_comments: List[Span] = field(default_factory=list)
    kind: NodeKind = NodeKind.OBJECT_EXPRESSION

    def find_entry(self, name: str) -> Optional[PropertyEntry]:
        """Return the keyed/shorthand entry named `name`, if any."""
        for entry in self.entries:
            if entry.kind != PropertyKind.SPREAD and entry.name == name:
                return entry
        return None


@dataclass
class NewExpression:
    span: Span
    callee: Optional[str]
    arguments: List["Expression"] = field(default_factory=list)
    kind: NodeKind = NodeKind.NEW_EXPRESSION

    def options_object(self) -> Optional[ObjectExpression]:
        """First object-literal argument, the constructor's options."""
        for argument in self.arguments:
            if isinstance(argument, ObjectExpression):
                return argument
        return None


Expression = Union[ObjectExpression, NewExpression, Opaque]


@dataclass
class VariableDeclarator:
    span: Span
    name: Optional[str]
    init: Optional[Expression] = None
    kind: NodeKind = NodeKind.VARIABLE_DECLARATOR


@dataclass
class VariableDeclaration:
    span: Span
    keyword: str
    declarators: List[VariableDeclarator] = field(default_factory=list)
    exported: bool = False
    kind: NodeKind = NodeKind.VARIABLE_DECLARATION


@dataclass
class ImportDeclaration:
    span: Span
    source: str
    raw: str
    kind: NodeKind = NodeKind.IMPORT_DECLARATION


Statement = Union[ImportDeclaration, VariableDeclaration, Comment, Opaque]


@dataclass
class Program:
    span: Span
    body: List[Statement] = field(default_factory=list)
    kind: NodeKind = NodeKind.PROGRAM

    @property
    def imports(self) -> List[ImportDeclaration]:
        return [node for node in self.body if node.kind == NodeKind.IMPORT_DECLARATION]

    @property
    def declarators(self) -> List[VariableDeclarator]:
        """All top-level variable declarators in source order."""
        result = []
        for node in self.body:
            if node.kind == NodeKind.VARIABLE_DECLARATION:
                result.extend(node.declarators)
        return result


@dataclass(frozen=True)
class SourceUnit:
    """
    Raw text paired with its parse, alive for a single operation call.
    """
    text: str
    source: bytes
    language: str
    tree: Tree
    program: Program

    def slice(self, span: Span) -> str:
        return span.slice(self.source)


@dataclass(frozen=True)
class TextEdit:
    """Replace source[start:end] with `replacement`."""
    start: int
    end: int
    replacement: str = ""
