"""Exception types raised by docblockr-mcp."""


class DocblockrError(Exception):
    """Base class for all docblockr-mcp errors."""


class UnsupportedLanguageError(DocblockrError, ValueError):
    """Raised when no parser is registered for a language identifier."""

    def __init__(self, language: str):
        self.language = language
        super().__init__(f"This language is not supported: {language}")


class GrammarError(DocblockrError):
    """Raised when a grammar table is internally inconsistent."""
