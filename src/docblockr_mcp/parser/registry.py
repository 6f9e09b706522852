"""Language registry mapping language identifiers to parser classes."""

from typing import Optional

from ..config import Config
from ..errors import UnsupportedLanguageError
from .clike import C, Java
from .extractor import Parser
from .php import PHP
from .scss import SCSS
from .typescript import JavaScript, TypeScript

# Vue single-file components are parsed as TypeScript
LANGUAGE_REGISTRY: dict[str, type[Parser]] = {
    "c": C,
    "java": Java,
    "javascript": JavaScript,
    "php": PHP,
    "scss": SCSS,
    "typescript": TypeScript,
    "vue": TypeScript,
}


def get_parser(language: str, config: Optional[Config] = None) -> Parser:
    """Create the parser registered for a language identifier.

    Raises:
        UnsupportedLanguageError: If no parser is registered for the language.
    """
    try:
        parser_class = LANGUAGE_REGISTRY[language]
    except KeyError:
        raise UnsupportedLanguageError(language) from None
    return parser_class(config)


def supported_languages() -> list[str]:
    return sorted(LANGUAGE_REGISTRY)
