"""Parser package for extracting symbols from declaration lines."""

from .symbols import Parameter, ReturnInfo, SymbolKind, Symbols
from .languages import CommentStyle, Grammar
from .lexer import Token, lex
from .extractor import ParseState, Parser
from .registry import LANGUAGE_REGISTRY, get_parser, supported_languages

__all__ = [
    "Parameter",
    "ReturnInfo",
    "SymbolKind",
    "Symbols",
    "CommentStyle",
    "Grammar",
    "Token",
    "lex",
    "ParseState",
    "Parser",
    "LANGUAGE_REGISTRY",
    "get_parser",
    "supported_languages",
]
