"""
CodeFormatter: Canonical formatting through an external formatter.

Text is piped through prettier on stdin; the formatter is the only judge of
what "formatted" means.
"""

import shutil
import subprocess
from typing import List, Optional

from jsmods.logging_config import logger
from jsmods.exceptions import FormatterError
from .config import FORMATTERS, get_mutation_config


class CodeFormatter:
    """
    Format source text with prettier.

    Features:
    - One formatter configuration per language (FORMATTERS)
    - Source piped through stdin, no temporary files
    - Timeout and missing-binary handling as FormatterError
    """

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize formatter with optional config.

        Args:
            config: Optional config overrides (merges with get_mutation_config())
        """
        self.config = {**get_mutation_config(), **(config or {})}

    def command_for(self, language: str) -> List[str]:
        """
        Build the formatter command line for a language.

        Raises:
            FormatterError: If no formatter is configured for the language
        """
        formatter_config = FORMATTERS.get(language)
        if not formatter_config:
            raise FormatterError(f"No formatter configured for {language}")

        command = self.config.get("prettier_command") or formatter_config["command"]
        return [command] + formatter_config["args"]

    def format(self, text: str, language: str = "javascript") -> str:
        """
        Format source text.

        Args:
            text: Source text
            language: "javascript", "typescript" or "css"

        Returns:
            Formatted text

        Raises:
            FormatterError: If the formatter is missing, fails or times out
        """
        full_command = self.command_for(language)
        if not shutil.which(full_command[0]):
            raise FormatterError(f"Formatter '{full_command[0]}' not found in PATH")

        timeout = self.config["formatter_timeout"]
        try:
            result = subprocess.run(
                full_command,
                input=text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            error_msg = f"Formatter timeout after {timeout}s"
            logger.error(error_msg)
            raise FormatterError(error_msg)
        except OSError as e:
            error_msg = f"Formatter error: {e}"
            logger.error(error_msg)
            raise FormatterError(error_msg)

        if result.returncode != 0:
            error_msg = (result.stderr or result.stdout).strip()
            logger.error(f"Formatter failed: {error_msg}")
            raise FormatterError(error_msg or f"Formatter exited with status {result.returncode}")

        logger.debug(f"Formatted {len(text)} chars of {language} with {full_command[0]}")
        return result.stdout

    def is_formatted(self, text: str, language: str = "javascript") -> bool:
        """True iff formatting `text` leaves it unchanged."""
        return self.format(text, language) == text
