"""
Configuration for the codemod engine.

Language routing, the LiveSocket call-site pattern and the default CSS rule.
"""

from jsmods.exceptions import InvalidInput

# Mapping of file extensions to language names used across the package
SUPPORTED_EXTENSIONS = {
    ".js": "javascript",
    ".ts": "typescript",
    ".css": "css",
}

SCRIPT_LANGUAGES = ("javascript", "typescript")

LIVE_SOCKET = {
    "variable": "liveSocket",
    "constructor": "LiveSocket",
    "hooks_key": "hooks",
}

CSS_RULE = {
    "selector": ".hide-scrollbar",
    "property": "display",
    "value": "none",
}


def validate_extension(extension: str) -> str:
    """
    Validate a file extension and return its language.

    Args:
        extension: File extension (e.g., '.js', '.css')

    Returns:
        The language name for the extension.

    Raises:
        InvalidInput: If the extension is not supported.
    """
    language = SUPPORTED_EXTENSIONS.get(extension.lower())
    if not language:
        supported = ", ".join(SUPPORTED_EXTENSIONS.keys())
        raise InvalidInput(
            f"File extension '{extension}' is not supported. Supported extensions: {supported}"
        )
    return language


def validate_script_language(language: str) -> str:
    """Reject languages the JS engine cannot parse (css goes to the CSS engine)."""
    if language not in SCRIPT_LANGUAGES:
        supported = ", ".join(SCRIPT_LANGUAGES)
        raise InvalidInput(
            f"Language '{language}' is not a script language. Supported languages: {supported}"
        )
    return language
