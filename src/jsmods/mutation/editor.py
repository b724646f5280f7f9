"""
CodeEditor: Span-based splicing and object-literal printing.

Unedited bytes are copied verbatim; only the spans named by TextEdits change.
Edited object literals are re-rendered from their entries.
"""

from typing import Iterable, List, Optional, Sequence

from jsmods.logging_config import logger
from jsmods.exceptions import ParseError
from jsmods.parser.ast import ObjectExpression, PropertyEntry, PropertyKind, SourceUnit, Span, TextEdit
from jsmods.parser.javascript_parser import parse
from .config import INDENT_DETECTION, get_mutation_config


class CodeEditor:
    """
    Apply structural edits to source text.

    Features:
    - Merge and apply non-overlapping span edits
    - Remove whole statements together with their line break
    - Render object literals inline or one entry per line
    - Detect the file's indentation unit (tabs vs 2/4 spaces)
    """

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize code editor with optional config.

        Args:
            config: Optional config overrides (merges with get_mutation_config())
        """
        self.config = {**get_mutation_config(), **(config or {})}

    # ------------------------------------------------------------------
    # Splicing
    # ------------------------------------------------------------------

    def apply_edits(self, source: bytes, edits: Iterable[TextEdit]) -> str:
        """
        Apply edits to the source and return the new text.

        Overlapping deletions are merged; any other overlap is a bug in the caller.

        Raises:
            ValueError: If two non-deletion edits overlap
        """
        ordered = self._merge_deletions(sorted(edits, key=lambda e: (e.start, e.end)))

        chunks = []
        cursor = 0
        for edit in ordered:
            if edit.start < cursor:
                raise ValueError(f"Overlapping edits at byte {edit.start}")
            chunks.append(source[cursor:edit.start])
            chunks.append(edit.replacement.encode("utf-8"))
            cursor = edit.end
        chunks.append(source[cursor:])

        logger.debug(f"Applied {len(ordered)} edit(s)")
        return b"".join(chunks).decode("utf-8")

    def rewrite(self, unit: SourceUnit, edits: Sequence[TextEdit]) -> SourceUnit:
        """
        Apply edits to a SourceUnit and re-parse the result into a new one.

        Returns the input unit itself when there is nothing to apply.

        Raises:
            ParseError: If the edited text no longer parses
        """
        if not edits:
            return unit

        new_text = self.apply_edits(unit.source, edits)
        if not self.config.get("validate_output", True):
            return SourceUnit(new_text, new_text.encode("utf-8"), unit.language, unit.tree, unit.program)

        try:
            return parse(new_text, unit.language)
        except ParseError as e:
            logger.error(f"Edited source failed to parse: {e.message}")
            raise ParseError(unit.language, f"edited source failed to parse ({e.message})")

    def _merge_deletions(self, edits: List[TextEdit]) -> List[TextEdit]:
        merged: List[TextEdit] = []
        for edit in edits:
            if merged:
                last = merged[-1]
                if edit.start <= last.end and not edit.replacement and not last.replacement:
                    merged[-1] = TextEdit(last.start, max(last.end, edit.end))
                    continue
            merged.append(edit)
        return merged

    def remove_statements(self, source: bytes, spans: Sequence[Span]) -> List[TextEdit]:
        """
        Build deletions for top-level statements.

        A statement alone on its line takes the whole line with it; otherwise
        only the statement and the blanks next to it are removed. When the
        removed lines run to the end of a file without a final newline, the
        preceding line break goes with them.
        """
        deletions = self._merge_deletions(
            sorted((self._statement_deletion(source, span) for span in spans), key=lambda e: (e.start, e.end))
        )

        edits = []
        for edit in deletions:
            at_line_start = edit.start > 0 and source[edit.start - 1:edit.start] == b"\n"
            if edit.end == len(source) and not source.endswith(b"\n") and at_line_start:
                back = edit.start - 1
                if back > 0 and source[back - 1:back] == b"\r":
                    back -= 1
                edit = TextEdit(back, edit.end)
            edits.append(edit)
        return edits

    def _statement_deletion(self, source: bytes, span: Span) -> TextEdit:
        start, end = span.start, span.end
        line_start = source.rfind(b"\n", 0, start) + 1
        owns_line_start = source[line_start:start].strip() == b""

        probe = end
        while probe < len(source) and source[probe:probe + 1] in (b" ", b"\t", b"\r"):
            probe += 1
        at_eof = probe >= len(source)
        owns_line_end = at_eof or source[probe:probe + 1] == b"\n"

        if owns_line_start and owns_line_end:
            return TextEdit(line_start, len(source) if at_eof else probe + 1)

        if owns_line_end:
            back = start
            while back > line_start and source[back - 1:back] in (b" ", b"\t"):
                back -= 1
            return TextEdit(back, probe)

        return TextEdit(start, probe)

    # ------------------------------------------------------------------
    # Indentation
    # ------------------------------------------------------------------

    def detect_indentation(self, text: str) -> str:
        """
        Detect indentation style from source text.

        Args:
            text: Source text

        Returns:
            Indent unit string ("\t", "  " or "    ")
        """
        max_lines = INDENT_DETECTION["max_sample_lines"]
        sample_lines = text.split("\n")[:max_lines]

        tab_count = 0
        space_count = 0
        space_widths = {}

        for line in sample_lines:
            if not line.strip():
                continue

            indent = self._get_indent(line)
            if "\t" in indent:
                tab_count += 1
            elif len(indent) > 0:
                space_count += 1
                width = len(indent)
                space_widths[width] = space_widths.get(width, 0) + 1

        if tab_count > space_count:
            return "\t"
        # Odd widths are comment continuations (" * ...") or alignment
        even_widths = [width for width in space_widths if width % 2 == 0]
        if even_widths:
            # The narrowest indentation in use is one nesting level
            narrowest = min(even_widths)
            return "    " if narrowest % 4 == 0 else "  "
        return INDENT_DETECTION["default_indent"]

    def line_indent(self, source: bytes, offset: int) -> str:
        """Leading whitespace of the line containing `offset`."""
        line_start = source.rfind(b"\n", 0, offset) + 1
        line_end = source.find(b"\n", offset)
        if line_end == -1:
            line_end = len(source)
        line = source[line_start:line_end].decode("utf-8")
        return self._get_indent(line)

    def column_of(self, source: bytes, offset: int) -> int:
        line_start = source.rfind(b"\n", 0, offset) + 1
        return len(source[line_start:offset].decode("utf-8"))

    def _get_indent(self, line: str) -> str:
        """Extract indentation from a line."""
        return line[:len(line) - len(line.lstrip())]

    # ------------------------------------------------------------------
    # Object printing
    # ------------------------------------------------------------------

    def replace_object(
        self,
        source: bytes,
        obj: ObjectExpression,
        entries: Sequence[PropertyEntry],
        indent_unit: str,
    ) -> TextEdit:
        """Build the edit that re-renders `obj` with a new entry list."""
        rendered = self.render_object(
            source,
            entries,
            base_indent=self.line_indent(source, obj.span.start),
            column=self.column_of(source, obj.span.start),
            indent_unit=indent_unit,
            template=obj,
        )
        line_ending = detect_line_ending(source.decode("utf-8"))
        return TextEdit(obj.span.start, obj.span.end, normalize_line_endings(rendered, line_ending))

    def render_object(
        self,
        source: bytes,
        entries: Sequence[PropertyEntry],
        base_indent: str,
        column: int,
        indent_unit: str,
        template: Optional[ObjectExpression] = None,
    ) -> str:
        """
        Render an object literal.

        Args:
            source: Source bytes the existing entries point into
            entries: Final entry list (existing and synthesized)
            base_indent: Indentation of the line that opens the object
            column: Column of the opening brace
            indent_unit: One nesting level of indentation
            template: The object being replaced, if any (layout hints and comments)

        Returns:
            Object literal text starting with "{" and ending with "}"
        """
        entry_indent = self._entry_indent(source, template, base_indent, indent_unit)
        texts = [self._entry_text(source, entry, entry_indent, indent_unit) for entry in entries]
        dangling = template.dangling_comments if template else []

        if not texts and not dangling:
            return "{}"

        has_comments = bool(dangling) or any(
            entry.leading_comments or entry.trailing_comment for entry in entries
        )
        multiline = (
            (template is not None and template.multiline)
            or has_comments
            or any("\n" in text for text in texts)
        )

        if not multiline:
            inline = "{ " + ", ".join(texts) + " }"
            if column + len(inline) <= self.config["max_inline_width"]:
                return inline

        trailing_comma = template is not None and template.multiline and template.trailing_comma

        lines = ["{"]
        for index, (entry, text) in enumerate(zip(entries, texts)):
            for comment in entry.leading_comments:
                lines.append(entry_indent + comment.slice(source))
            is_last = index == len(entries) - 1
            line = entry_indent + text + ("," if not is_last or trailing_comma else "")
            if entry.trailing_comment is not None:
                line += " " + entry.trailing_comment.slice(source)
            lines.append(line)
        for comment in dangling:
            lines.append(entry_indent + comment.slice(source))
        lines.append(base_indent + "}")
        return "\n".join(lines)

    def _entry_indent(
        self,
        source: bytes,
        template: Optional[ObjectExpression],
        base_indent: str,
        indent_unit: str,
    ) -> str:
        # Reuse the indentation of an existing first entry that sits on its own line
        if template is not None and template.multiline and template.entries:
            first = template.entries[0]
            start = first.leading_comments[0].start if first.leading_comments else first.span.start
            line_start = source.rfind(b"\n", 0, start) + 1
            prefix = source[line_start:start]
            if line_start > template.span.start and prefix.strip() == b"":
                return prefix.decode("utf-8")
        return base_indent + indent_unit

    def _entry_text(self, source: bytes, entry: PropertyEntry, entry_indent: str, indent_unit: str) -> str:
        if entry.span is not None:
            return entry.span.slice(source)
        if entry.text is not None:
            return entry.text
        if entry.kind == PropertyKind.SPREAD:
            return "..." + entry.name
        if entry.kind == PropertyKind.KEYED and isinstance(entry.value, ObjectExpression) and entry.value.span is None:
            prefix = f"{entry.name}: "
            return prefix + self.render_object(
                source,
                entry.value.entries,
                base_indent=entry_indent,
                column=len(entry_indent) + len(prefix),
                indent_unit=indent_unit,
            )
        return entry.name


def detect_line_ending(content: str) -> str:
    r"""
    Detect line ending style (LF vs CRLF).

    Returns:
        '\r\n' for CRLF, '\n' for LF
    """
    if "\r\n" in content:
        return "\r\n"
    return "\n"


def normalize_line_endings(content: str, line_ending: str) -> str:
    """Rewrite every line break in `content` as `line_ending`."""
    content = content.replace("\r\n", "\n")
    if line_ending == "\r\n":
        content = content.replace("\n", "\r\n")
    return content


def synthesize_shorthand(name: str) -> PropertyEntry:
    return PropertyEntry(kind=PropertyKind.SHORTHAND, name=name)


def synthesize_spread(name: str) -> PropertyEntry:
    return PropertyEntry(kind=PropertyKind.SPREAD, name=name)


def synthesize_keyed_object(key: str, entries: Sequence[PropertyEntry]) -> PropertyEntry:
    return PropertyEntry(kind=PropertyKind.KEYED, name=key, value=ObjectExpression(span=None, entries=list(entries)))
