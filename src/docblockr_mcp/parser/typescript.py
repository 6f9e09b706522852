"""Parses tokens for TypeScript and JavaScript.

Beyond ``function`` declarations, TypeScript declares functions without a
keyword in several ways:

    public foo(bar: number) {           method shorthand
    Fizz.buzz.foo = function (bar) {    function expression assigned to a property
    const foo = (bar) => {              arrow function assigned to a variable

so the kind of a keyword-less line is only decided once one of ``(``,
``function`` or ``=>`` shows up. Anything else ends up as a variable.
"""

from typing import Optional

from .extractor import ParseState, Parser
from .languages import JAVASCRIPT_GRAMMAR, TYPESCRIPT_GRAMMAR
from .lexer import Token
from .symbols import SymbolKind, Symbols


class TypeScript(Parser):
    grammar = TYPESCRIPT_GRAMMAR

    def is_type(self, value: Optional[str]) -> bool:
        if not value or self.is_reserved(value):
            return False
        if self.matches_grammar(value, "type") or self.matches_identifier(value):
            return True
        # Atomic object, tuple and function types: "{a: number}", "[string]"
        return len(value) > 1 and value[0] in "{[("

    def is_variable_name(self, value: Optional[str]) -> bool:
        return self.is_name(value) and value != "this"

    def parse_function(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        if self.matches_grammar(token.value, "function"):
            symbols.declare(SymbolKind.FUNCTION)
            if not symbols.set_name(state.candidate) and not symbols.name:
                state.expecting_name = True
            return True

        if symbols.kind is None:
            if token.is_("=>"):
                symbols.declare(SymbolKind.FUNCTION)
                symbols.set_name(state.candidate)
                return True
            if token.is_("(") and state.candidate and not state.assigned:
                symbols.declare(SymbolKind.FUNCTION)
                symbols.set_name(state.candidate)
            # Let the parameter handler open the list
            return False

        if symbols.kind is not SymbolKind.FUNCTION:
            return False

        if token.is_("=>"):
            return True

        return self.parse_function_signature(token, symbols, state)

    def collects_parameters(self, symbols: Symbols, state: ParseState) -> bool:
        # Parameters after "=" are collected tentatively for arrow functions
        return symbols.kind is SymbolKind.FUNCTION or (symbols.kind is None and state.assigned)

    def parse_parameter(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        """Name-then-type parameter: ``bar``, ``bar: number``, ``bar?: string[]``."""
        value = token.value
        param = symbols.last_parameter

        if state.expecting_parameter_type:
            state.expecting_parameter_type = False
            # Types annotating a destructured group are not kept
            if param is not None and not state.group_closed:
                param.type = value
            return True

        if token.is_(":"):
            state.expecting_parameter_type = True
            return True

        if token.is_("?"):
            return True

        if token.is_("[") and param is not None and param.type:
            param.type += "[]"
            return True

        if token.is_("]"):
            return True

        if state.at_parameter_start and self.is_variable_name(value):
            symbols.add_parameter(name=value)
            return True

        return False

    def parse_variable(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        if symbols.kind is not None:
            return False

        value = token.value

        if state.expecting_variable_type:
            state.expecting_variable_type = False
            state.pending_type = value
            return True

        if self.matches_grammar(value, "variable"):
            state.expecting_name = True
            return True

        if state.expecting_name and self.is_name(value):
            symbols.set_name(value)
            state.expecting_name = False
            return True

        if token.is_("="):
            state.assigned = True
            return True

        if token.is_(":") and (symbols.name or state.candidate) and not state.assigned:
            state.expecting_variable_type = True
            return True

        if not symbols.name and not state.assigned and self.is_name(value):
            # The last identifier before "=" or "(" names the symbol
            state.candidate = value
            return True

        return False

    def finalize(self, symbols: Symbols, state: ParseState):
        if symbols.kind is None and (symbols.name or state.candidate):
            symbols.set_name(state.candidate)
            symbols.declare(SymbolKind.VARIABLE)
            if state.pending_type:
                symbols.returns.type = state.pending_type
        super().finalize(symbols, state)


class JavaScript(TypeScript):
    grammar = JAVASCRIPT_GRAMMAR
