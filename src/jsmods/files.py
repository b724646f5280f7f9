"""
Path mode: read a source file and work out its language from the extension.
"""

from pathlib import Path
from typing import Tuple, Union

from jsmods.logging_config import logger
from jsmods.config import validate_extension
from jsmods.exceptions import InvalidInput


def read_and_validate_file(path: Union[str, Path]) -> Tuple[str, str]:
    """
    Read a source file after checking it exists and has a supported extension.

    Args:
        path: File path

    Returns:
        (text, language)

    Raises:
        InvalidInput: If the file is missing, not a file, or has an unsupported extension
    """
    file_path = Path(path)
    if not file_path.exists():
        raise InvalidInput(f"File '{file_path}' does not exist")
    if not file_path.is_file():
        raise InvalidInput(f"'{file_path}' is not a file")

    language = validate_extension(file_path.suffix)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidInput(f"Failed to read '{file_path}': {e}")

    logger.debug(f"Read {file_path} ({language}, {len(text)} chars)")
    return text, language


def write_file(path: Union[str, Path], text: str) -> None:
    """Write text back to a source file (CLI --write)."""
    Path(path).write_text(text, encoding="utf-8")
    logger.info(f"Wrote {path}")
