"""
CodemodFacade: one entry point per public operation.

Each call resolves its input (raw text or a file path), runs the core
operation and converts the outcome into an OperationResult. The core raises;
this is the only layer that turns exceptions into error results.
"""

from typing import Any, Callable, Dict, Optional, Tuple

from jsmods.logging_config import logger
from jsmods.config import SCRIPT_LANGUAGES, validate_script_language
from jsmods.exceptions import InvalidInput, JsModsError
from jsmods.files import read_and_validate_file
from jsmods.mutation import (
    CodeEditor,
    CodeFormatter,
    ImportManager,
    css_module_imported,
    ensure_hide_scrollbar,
    exist_live_socket,
    exist_var,
    extend_hook_object,
    extend_var_object_by_object_names,
    get_mutation_config,
    remove_objects_from_hooks,
)
from jsmods.schemas import OperationResult
from jsmods.statistics import statistics

MODES = ("content", "path")


class CodemodFacade:
    """
    Main facade for codemod operations.

    Pipeline per call:
    1. Resolve input (content or path mode)
    2. Check the language fits the operation
    3. Run the query or mutation
    4. Wrap the payload (or the error message) in an OperationResult
    """

    def __init__(self, formatter: Optional[CodeFormatter] = None, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the facade.

        Args:
            formatter: Formatter used by format/is_formatted (defaults to prettier)
            config: Optional config overrides
        """
        self.config = {**get_mutation_config(), **(config or {})}
        self.editor = CodeEditor(self.config)
        self.formatter = formatter or CodeFormatter(self.config)
        self.import_manager = ImportManager(self.editor)
        logger.debug("CodemodFacade initialized")

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _resolve(self, source: str, mode: str, language: str) -> Tuple[str, str]:
        if mode == "content":
            return source, language
        if mode == "path":
            return read_and_validate_file(source)
        raise InvalidInput(f"Unknown mode '{mode}'. Supported modes: {', '.join(MODES)}")

    def _run(
        self,
        operation: str,
        source: str,
        mode: str,
        language: str,
        action: Callable[[str, str], Any],
        accepts: Tuple[str, ...] = SCRIPT_LANGUAGES,
        failure: Any = None,
    ) -> OperationResult:
        """
        Run one operation and wrap its outcome.

        Args:
            operation: Operation name reported in the result
            source: Text (content mode) or file path (path mode)
            mode: "content" or "path"
            language: Language of the text in content mode
            action: Callable taking (text, language) and returning the payload
            accepts: Languages the operation works on
            failure: Payload for error results; None means the error message
        """
        try:
            text, language = self._resolve(source, mode, language)
            if language not in accepts:
                if accepts == SCRIPT_LANGUAGES:
                    validate_script_language(language)
                raise InvalidInput(f"Operation '{operation}' does not support {language} sources")
            payload = action(text, language)
        except JsModsError as e:
            logger.warning(f"{operation} failed: {e}")
            return OperationResult(
                status="error",
                operation=operation,
                payload=str(e) if failure is None else failure,
                error=str(e),
            )
        return OperationResult(status="ok", operation=operation, payload=payload)

    # ------------------------------------------------------------------
    # Imports
    # ------------------------------------------------------------------

    def module_imported(self, source: str, match_spec: str, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run(
            "module_imported", source, mode, language,
            lambda text, lang: self.import_manager.module_imported(text, match_spec, lang),
            failure=False,
        )

    def insert_imports(self, source: str, import_lines, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run(
            "insert_imports", source, mode, language,
            lambda text, lang: self.import_manager.insert_imports(text, import_lines, lang),
        )

    def remove_imports(self, source: str, targets, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run(
            "remove_imports", source, mode, language,
            lambda text, lang: self.import_manager.remove_imports(text, targets, lang),
        )

    # ------------------------------------------------------------------
    # LiveSocket hooks
    # ------------------------------------------------------------------

    def exist_live_socket(self, source: str, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run("exist_live_socket", source, mode, language, exist_live_socket, failure=False)

    def extend_hook_object(self, source: str, names, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run(
            "extend_hook_object", source, mode, language,
            lambda text, lang: extend_hook_object(text, names, lang, self.editor),
        )

    def remove_objects_from_hooks(self, source: str, names, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run(
            "remove_objects_from_hooks", source, mode, language,
            lambda text, lang: remove_objects_from_hooks(text, names, lang, self.editor),
        )

    # ------------------------------------------------------------------
    # Variables
    # ------------------------------------------------------------------

    def exist_var(self, source: str, var_name: str, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run(
            "exist_var", source, mode, language,
            lambda text, lang: exist_var(text, var_name, lang),
            failure=False,
        )

    def extend_var_object_by_object_names(
        self, source: str, var_name: str, names, mode: str = "content", language: str = "javascript"
    ) -> OperationResult:
        return self._run(
            "extend_var_object_by_object_names", source, mode, language,
            lambda text, lang: extend_var_object_by_object_names(text, var_name, names, lang, self.editor),
        )

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def statistics(self, source: str, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run("statistics", source, mode, language, statistics)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format(self, source: str, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run(
            "format", source, mode, language, self.formatter.format,
            accepts=SCRIPT_LANGUAGES + ("css",),
        )

    def is_formatted(self, source: str, mode: str = "content", language: str = "javascript") -> OperationResult:
        return self._run(
            "is_formatted", source, mode, language, self.formatter.is_formatted,
            accepts=SCRIPT_LANGUAGES + ("css",),
            failure=False,
        )

    # ------------------------------------------------------------------
    # CSS
    # ------------------------------------------------------------------

    def ensure_hide_scrollbar(self, source: str, mode: str = "content") -> OperationResult:
        return self._run(
            "ensure_hide_scrollbar", source, mode, "css",
            lambda text, lang: ensure_hide_scrollbar(text),
            accepts=("css",),
        )

    def css_module_imported(self, source: str, path: str, mode: str = "content") -> OperationResult:
        return self._run(
            "css_module_imported", source, mode, "css",
            lambda text, lang: css_module_imported(text, path),
            accepts=("css",),
            failure=False,
        )
