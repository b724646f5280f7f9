# Custom exceptions for jsmods

class JsModsError(Exception):
    """Base exception for all application-specific errors."""
    pass

class ParseError(JsModsError):
    """Raised when source text is not syntactically valid for its language."""
    def __init__(self, language: str, message: str):
        self.language = language
        self.message = message
        super().__init__(f"Failed to parse {language} source: {message}")

class StructureNotFound(JsModsError):
    """Raised when valid source lacks a required pattern (liveSocket, a variable, ...)."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

class InvalidInput(JsModsError):
    """Raised for a bad file path, an unsupported extension or a malformed entry name."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

class FormatterError(JsModsError):
    """Raised when the external formatter is missing, fails or times out."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

class ConfigError(JsModsError):
    """Raised for configuration-related problems."""
    pass
