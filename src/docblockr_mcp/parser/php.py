"""Parses tokens for the PHP language."""

import re
from typing import Optional

from .extractor import ParseState, Parser
from .languages import PHP_GRAMMAR
from .symbols import SymbolKind, Symbols

# A leading "?" marks a nullable type
NULLABLE = re.compile(r"^\?")

CLASS_NAME = re.compile(r"^\\?[a-zA-Z_\x80-\xff][a-zA-Z0-9_\x80-\xff\\]*$")


class PHP(Parser):
    grammar = PHP_GRAMMAR

    def is_type(self, value: Optional[str]) -> bool:
        """Check if the given string is a PHP type hint."""
        if not value:
            return False
        value = NULLABLE.sub("", value)
        if self.is_reserved(value):
            return False
        return self.matches_grammar(value, "type") or CLASS_NAME.match(value) is not None

    def is_variable_name(self, value: Optional[str]) -> bool:
        return bool(value) and value.startswith("$") and len(value) > 1

    def finalize(self, symbols: Symbols, state: ParseState):
        super().finalize(symbols, state)
        if symbols.kind is SymbolKind.CLASS:
            symbols.returns.present = False

    def format_type(self, type: Optional[str]) -> Optional[str]:
        """Convert a nullable type to "mixed" or a union with null."""
        if not type or not NULLABLE.match(type):
            return type
        if self.config.php_mixed_union_types:
            return "mixed"
        return f"{NULLABLE.sub('', type)}|null"
