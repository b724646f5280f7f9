"""
ImportManager: Query, insert and remove top-level import declarations.
"""

from typing import List, Sequence, Tuple, Union

from jsmods.logging_config import logger
from jsmods.exceptions import ParseError
from jsmods.parser import parse
from jsmods.parser.ast import ImportDeclaration, NodeKind, Program, TextEdit
from .editor import CodeEditor, detect_line_ending, normalize_line_endings
from .locator import ImportMatcher, find_imports, normalize_import

Targets = Union[str, Sequence[str]]


class ImportManager:
    """
    Manage the import block of a JavaScript/TypeScript module.

    Features:
    - Answer whether a module (or an exact import statement) is imported
    - Insert import statements after the existing import block
    - Remove import statements by module path or by statement text
    """

    def __init__(self, editor: CodeEditor = None):
        """
        Initialize import manager.

        Args:
            editor: CodeEditor used to splice the source
        """
        self.editor = editor or CodeEditor()

    def module_imported(self, text: str, match_spec: str, language: str = "javascript") -> bool:
        """
        Check whether a module is imported.

        Args:
            text: Source text
            match_spec: Module path ("phoenix_live_view") or full import statement(s)
            language: Language name

        Returns:
            True if the module (or every given statement) is imported
        """
        program = parse(text, language).program
        snippets = self._as_snippet(match_spec, language)

        if snippets is None:
            module_path = match_spec.strip()
            return any(decl.source == module_path for decl in program.imports)

        existing = {normalize_import(decl.raw) for decl in program.imports}
        return all(normalize_import(snippet) in existing for snippet in snippets)

    def insert_imports(self, text: str, import_lines: Targets, language: str = "javascript") -> str:
        """
        Insert import statements before the first non-import statement.

        Args:
            text: Source text
            import_lines: One string (possibly several lines) or a list of statements
            language: Language name

        Returns:
            Modified text with the imports inserted in the given order

        Raises:
            ParseError: If the source or the import lines do not parse, or if the
                import lines contain anything but import statements
        """
        unit = parse(text, language)
        block_imports = self._parse_import_block(self._join(import_lines), language)
        if not block_imports:
            return text

        block = "\n".join(decl.raw for decl in block_imports)
        edit = self._insertion_edit(unit.program, unit.source, block)
        edit = TextEdit(edit.start, edit.end, normalize_line_endings(edit.replacement, detect_line_ending(text)))
        logger.debug(f"Inserting {len(block_imports)} import(s) at byte {edit.start}")
        return self.editor.rewrite(unit, [edit]).text

    def remove_imports(self, text: str, targets: Targets, language: str = "javascript") -> str:
        """
        Remove every import that matches a module path or an import statement.

        Absent targets are no-ops.

        Returns:
            Modified text, or the input unchanged when nothing matched
        """
        unit = parse(text, language)
        module_paths, snippets = self._split_targets(targets, language)
        matched = find_imports(unit.program, ImportMatcher(module_paths, snippets))
        if not matched:
            return text

        logger.debug(f"Removing {len(matched)} import(s)")
        edits = self.editor.remove_statements(unit.source, [decl.span for decl in matched])
        return self.editor.rewrite(unit, edits).text

    def _insertion_edit(self, program: Program, source: bytes, block: str) -> TextEdit:
        """
        Find where the import block goes.

        After the last import that precedes the first non-import statement; at
        the start of that statement's line when no import precedes it; appended
        when the module holds only comments.
        """
        last_import = None
        first_statement = None
        for node in program.body:
            if node.kind == NodeKind.COMMENT:
                continue
            if node.kind == NodeKind.IMPORT_DECLARATION:
                last_import = node
                continue
            first_statement = node
            break

        if last_import is not None:
            line_end = source.find(b"\n", last_import.span.end)
            if first_statement is not None and (line_end == -1 or first_statement.span.start < line_end):
                return TextEdit(last_import.span.end, last_import.span.end, "\n" + block)
            if line_end == -1:
                return TextEdit(len(source), len(source), "\n" + block)
            return TextEdit(line_end + 1, line_end + 1, block + "\n")

        if first_statement is not None:
            line_start = source.rfind(b"\n", 0, first_statement.span.start) + 1
            return TextEdit(line_start, line_start, block + "\n")

        if not source.strip():
            return TextEdit(0, len(source), block + "\n")
        if source.endswith(b"\n"):
            return TextEdit(len(source), len(source), block + "\n")
        return TextEdit(len(source), len(source), "\n" + block)

    def _parse_import_block(self, block: str, language: str) -> List[ImportDeclaration]:
        program = parse(block, language).program
        for node in program.body:
            if node.kind not in (NodeKind.IMPORT_DECLARATION, NodeKind.COMMENT):
                raise ParseError(language, "expected only import statements in the import lines")
        return program.imports

    def _as_snippet(self, target: str, language: str):
        """Import statements in `target`, or None when it is a bare module path."""
        if "import" not in target:
            return None
        try:
            program = parse(target, language).program
        except ParseError:
            return None
        statements = [node for node in program.body if node.kind != NodeKind.COMMENT]
        if not statements or any(node.kind != NodeKind.IMPORT_DECLARATION for node in statements):
            return None
        return [decl.raw for decl in statements]

    def _split_targets(self, targets: Targets, language: str) -> Tuple[List[str], List[str]]:
        module_paths = []
        snippets = []
        for target in ([targets] if isinstance(targets, str) else list(targets)):
            statements = self._as_snippet(target, language)
            if statements is None:
                module_paths.append(target.strip())
            else:
                snippets.extend(statements)
        return module_paths, snippets

    def _join(self, import_lines: Targets) -> str:
        if isinstance(import_lines, str):
            return import_lines
        return "\n".join(import_lines)


def module_imported(text: str, match_spec: str, language: str = "javascript") -> bool:
    return ImportManager().module_imported(text, match_spec, language)


def insert_imports(text: str, import_lines: Targets, language: str = "javascript") -> str:
    return ImportManager().insert_imports(text, import_lines, language)


def remove_imports(text: str, targets: Targets, language: str = "javascript") -> str:
    return ImportManager().remove_imports(text, targets, language)
