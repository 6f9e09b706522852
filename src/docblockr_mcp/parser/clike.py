"""Parses tokens for C-family languages (C and Java).

Neither language uses a keyword for functions or variables. A declaration
is a type followed by a name; a ``(`` right after the name makes it a
function, while ``=``, ``;``, ``[`` or the end of the line make it a
variable.
"""

import re
from typing import Optional

from .extractor import ParseState, Parser
from .languages import C_GRAMMAR, JAVA_GRAMMAR
from .lexer import Token
from .symbols import SymbolKind, Symbols

# Tokens ending a variable declaration
VARIABLE_END = ("=", ";", ",", "[")


class C(Parser):
    grammar = C_GRAMMAR

    # Type keywords taking the following identifier as part of the type
    tagged_types = frozenset({"struct", "union", "enum"})

    # Whether built-in type words combine ("unsigned long")
    multiword_types = True

    def is_type(self, value: Optional[str]) -> bool:
        return self.matches_grammar(value, "type")

    def starts_type(self, value: Optional[str]) -> bool:
        """Whether a token can begin a type (built-in or typedef name)."""
        return self.is_type(value) or self.is_name(value)

    def extend_type(self, type: str, token: Token, state: ParseState) -> Optional[str]:
        """Extend the type being read with this token.

        Returns the new type text, or None if the token is not part of it.
        """
        value = token.value

        if state.type_depth:
            if token.is_("<"):
                state.type_depth += 1
            elif token.is_(">"):
                state.type_depth -= 1
            return type + value

        if not type:
            return value if self.starts_type(value) else None

        if token.is_("<"):
            state.type_depth = 1
            return type + value
        if token.is_("*") or token.is_("..."):
            return type + value
        if token.is_("["):
            return type + "[]"
        if token.is_("]"):
            return type
        if self.multiword_types and self.is_type(value) and value not in self.tagged_types:
            return f"{type} {value}"
        if type.split(" ")[-1] in self.tagged_types and self.is_name(value):
            return f"{type} {value}"
        return None

    def parse_function(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        if symbols.kind is None:
            return self.parse_declaration(token, symbols, state)

        if symbols.kind is not SymbolKind.FUNCTION:
            return False

        return self.parse_function_signature(token, symbols, state)

    def parse_declaration(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        """Read ``type name`` until ``(`` shows this is a function."""
        if token.is_("("):
            if state.candidate:
                symbols.declare(SymbolKind.FUNCTION)
                symbols.set_name(state.candidate)
                symbols.returns.type = state.pending_type or None
            # Let the parameter handler open the list
            return False

        if state.candidate:
            return False

        extended = self.extend_type(state.pending_type, token, state)
        if extended is not None:
            state.pending_type = extended
            return True

        if state.pending_type and self.is_name(token.value):
            state.candidate = token.value
            return True

        return False

    def parse_parameter(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        """Type-before-name parameter: ``int bar``, ``const char *baz``."""
        value = token.value
        param = symbols.last_parameter

        if state.expecting_parameter_type and param is not None:
            extended = self.extend_type(param.type or "", token, state)
            if extended is not None:
                param.type = extended
                return True
            if self.is_variable_name(value):
                param.name = value
                state.expecting_parameter_type = False
                return True
            return False

        if state.at_parameter_start:
            type = self.extend_type("", token, state)
            if type is not None:
                symbols.add_parameter(type=type)
                state.expecting_parameter_type = True
                return True

        # Array declarator after the name: int values[]
        if token.is_("[") and param is not None and param.name and param.type:
            param.type += "[]"
            return True
        if token.is_("]"):
            return True

        return False

    def parse_variable(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        if symbols.kind is not None or not state.candidate:
            return False

        if token.value in VARIABLE_END:
            self.declare_variable(symbols, state)
            if token.is_("["):
                symbols.returns.type = (symbols.returns.type or "") + "[]"
            state.done = True
            return True

        return False

    def declare_variable(self, symbols: Symbols, state: ParseState):
        symbols.declare(SymbolKind.VARIABLE)
        symbols.set_name(state.candidate)
        symbols.returns.type = state.pending_type or None

    def finalize(self, symbols: Symbols, state: ParseState):
        if symbols.kind is None and state.candidate:
            self.declare_variable(symbols, state)

        # int main(void) takes no parameters
        params = symbols.parameters
        if len(params) == 1 and not params[0].name and params[0].type in self.grammar.void_types:
            params.clear()

        super().finalize(symbols, state)


class Java(C):
    grammar = JAVA_GRAMMAR

    tagged_types = frozenset()
    multiword_types = False

    def is_type(self, value: Optional[str]) -> bool:
        """Built-in types and capitalized class names (``List<String>``, ``int[]``)."""
        if not value or self.is_reserved(value):
            return False
        match = re.match(self.grammar.identifier, value)
        if match is None:
            return False
        base = match.group(0)
        return self.matches_grammar(base, "type") or base[0].isupper()

    def starts_type(self, value: Optional[str]) -> bool:
        return self.is_type(value)

    def parse_token(self, token: Token, symbols: Symbols, state: ParseState):
        # Annotations never affect the declaration
        if token.value.startswith("@"):
            return
        super().parse_token(token, symbols, state)

    def parse_declaration(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        # Type parameters of a generic method: public <T> T first(List<T> items)
        if not state.pending_type and (token.is_("<") or state.type_depth):
            if token.is_("<"):
                state.type_depth += 1
            elif token.is_(">"):
                state.type_depth -= 1
            return True

        # Constructor: a class name directly followed by "("
        if token.is_("(") and not state.candidate and self.grammar.is_identifier(state.pending_type):
            symbols.declare(SymbolKind.FUNCTION)
            symbols.set_name(state.pending_type)
            return False
        return super().parse_declaration(token, symbols, state)

    def finalize(self, symbols: Symbols, state: ParseState):
        super().finalize(symbols, state)
        # Only constructors lack a return type
        if symbols.kind is SymbolKind.FUNCTION and not symbols.returns.type:
            symbols.returns.present = False
