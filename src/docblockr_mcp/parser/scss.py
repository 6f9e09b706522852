"""Parses tokens for SCSS.

SCSS has no classes or types. ``@function`` and ``@mixin`` declare
functions, ``$name: value`` declares a variable, and parameter defaults
follow a colon: ``@mixin theme($color: red)``.
"""

from typing import Optional

from .extractor import ParseState, Parser
from .languages import SCSS_GRAMMAR
from .lexer import Token
from .symbols import Symbols


class SCSS(Parser):
    grammar = SCSS_GRAMMAR

    def is_type(self, value: Optional[str]) -> bool:
        return False

    def is_variable_name(self, value: Optional[str]) -> bool:
        return bool(value) and value.startswith("$") and len(value) > 1

    def parse_function(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        consumed = super().parse_function(token, symbols, state)
        if token.value == "@mixin":
            # Mixins emit styles, they never return a value
            symbols.returns.present = False
        return consumed

    def parse_parameter(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        if token.is_(":") and symbols.last_parameter is not None:
            state.expecting_value = True
            state.value_end = -1
            return True
        return super().parse_parameter(token, symbols, state)
