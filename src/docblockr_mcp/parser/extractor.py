"""Shared token-to-symbol state machine.

A ``Parser`` consumes the tokens of one declaration line and fills in a
``Symbols`` record. Language modules subclass it, supply a ``Grammar`` and
override the handlers where their syntax diverges:

    parse_class       class-like declarations
    parse_function    function/method declarations and return types
    parse_parameters  parameter lists (names, types, default values)
    parse_variable    variable/constant declarations

Each handler receives the token, the record being built and the transient
``ParseState`` for the current call, and returns True when it consumed the
token. The parser object itself holds no per-call state.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from ..config import Config
from .languages import Grammar
from .lexer import Token, lex
from .symbols import SymbolKind, Symbols

logger = structlog.get_logger()


@dataclass
class ParseState:
    """Expectation flags for a single tokenize call."""
    expecting_name: bool = False
    expecting_parameter: bool = False
    expecting_parameter_type: bool = False
    expecting_return_type: bool = False
    expecting_value: bool = False
    done: bool = False

    # Parenthesis depth inside the parameter list (1 = top level)
    parameter_depth: int = 0
    # True right after "(" or "," in the parameter list
    at_parameter_start: bool = False

    # Destructuring group ({a, b} or [a, b]) inside the parameter list
    group_depth: int = 0
    group_expects_binding: bool = False
    group_renaming: bool = False
    group_closed: bool = False

    # Declarations without a keyword (C, Java, TypeScript properties)
    pending_type: str = ""
    candidate: str = ""
    assigned: bool = False
    expecting_variable_type: bool = False
    # Depth of "<...>" while reading a generic type
    type_depth: int = 0

    # Depth of "[...]" and "{...}" inside a default value
    value_depth: int = 0
    # End byte of the last token appended to a default value
    value_end: int = -1

    def close_parameters(self):
        self.expecting_parameter = False
        self.expecting_parameter_type = False
        self.expecting_value = False
        self.parameter_depth = 0
        self.value_depth = 0
        self.group_depth = 0

    def next_parameter(self):
        self.expecting_parameter_type = False
        self.expecting_value = False
        self.at_parameter_start = True
        self.value_depth = 0
        self.group_closed = False


class Parser:
    """Base parser. Implements the type-before-name declaration style."""

    grammar: Grammar

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    # -- Token classifier -------------------------------------------------

    def matches_grammar(self, value: Optional[str], category: Optional[str] = None) -> bool:
        return self.grammar.matches(value, category)

    def matches_identifier(self, value: Optional[str]) -> bool:
        return self.grammar.matches_identifier(value)

    def is_reserved(self, value: Optional[str]) -> bool:
        return bool(value) and value in self.grammar.keywords

    def is_name(self, value: Optional[str]) -> bool:
        """True if the text is an identifier and not a reserved keyword."""
        return self.grammar.is_identifier(value) and not self.is_reserved(value)

    def is_type(self, value: Optional[str]) -> bool:
        """True for built-in types and class-name-shaped identifiers."""
        if not value or self.is_reserved(value):
            return False
        return self.matches_grammar(value, "type") or self.grammar.is_identifier(value)

    def is_variable_name(self, value: Optional[str]) -> bool:
        return self.is_name(value)

    # -- Entry points -----------------------------------------------------

    def lex(self, code: str) -> list[Token]:
        return lex(code, self.grammar)

    def tokenize(self, code: str) -> Symbols:
        """Parse one line of code into a symbol record."""
        return self.parse_tokens(self.lex(code.strip()))

    def parse_tokens(self, tokens: list[Token]) -> Symbols:
        """Run the state machine over an already lexed token sequence."""
        symbols = Symbols()
        state = ParseState()

        for token in tokens:
            if state.done and not state.expecting_parameter:
                break
            self.parse_token(token, symbols, state)

        self.finalize(symbols, state)
        logger.debug(
            "parser.symbols",
            language=self.grammar.name,
            kind=symbols.kind.value if symbols.kind else None,
            name=symbols.name,
            parameters=len(symbols.parameters),
        )
        return symbols

    def parse_token(self, token: Token, symbols: Symbols, state: ParseState):
        """Dispatch a token to the handlers, stopping at the first match."""
        if state.done:
            # Only an open parameter list keeps running after the name
            self.parse_parameters(token, symbols, state)
            return

        handlers = (
            self.parse_class,
            self.parse_function,
            self.parse_parameters,
            self.parse_variable,
        )
        for handler in handlers:
            if handler(token, symbols, state):
                return

    def render(self, code: str) -> str:
        """Parse a line of code and render its docblock."""
        return self.render_symbols(self.tokenize(code))

    def render_symbols(self, symbols: Symbols) -> str:
        from ..renderer import render_block

        return render_block(
            symbols,
            config=self.config,
            comment=self.config.comment_style_for(self.grammar),
            variable_tag=self.grammar.variable_tag,
        )

    # -- Handlers ---------------------------------------------------------

    def parse_class(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        if self.matches_grammar(token.value, "class"):
            symbols.declare(SymbolKind.CLASS)
            state.expecting_name = True
            return True

        if state.expecting_name and symbols.kind is SymbolKind.CLASS and self.is_name(token.value):
            symbols.set_name(token.value)
            state.expecting_name = False
            state.done = True
            return True

        return False

    def parse_function(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        if self.matches_grammar(token.value, "function"):
            symbols.declare(SymbolKind.FUNCTION)
            state.expecting_name = True
            return True

        if symbols.kind is not SymbolKind.FUNCTION:
            return False

        return self.parse_function_signature(token, symbols, state)

    def parse_function_signature(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        """Name, return type and end of a declaration already known to be a function."""
        value = token.value

        if state.expecting_parameter:
            return False

        if token.is_("[") and symbols.returns.type and not state.expecting_return_type:
            symbols.append_return_type("[]")
            return True

        if token.is_("]") and symbols.returns.type:
            return True

        if state.expecting_name and self.is_name(value):
            symbols.set_name(value)
            state.expecting_name = False
            return True

        if token.is_(":"):
            state.expecting_return_type = True
            return True

        if state.expecting_return_type and (self.is_type(value) or self.matches_identifier(value)):
            state.expecting_return_type = False
            symbols.returns.type = value
            return True

        if token.is_("{") or token.is_(";"):
            state.expecting_name = False
            state.done = True
            return True

        return False

    def collects_parameters(self, symbols: Symbols, state: ParseState) -> bool:
        """Whether parameter tokens should be recorded right now."""
        return symbols.kind is SymbolKind.FUNCTION

    def parse_parameters(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        if not self.collects_parameters(symbols, state):
            return False

        if token.is_("("):
            state.parameter_depth += 1
            if state.parameter_depth == 1:
                state.expecting_parameter = True
                state.next_parameter()
                return True
        elif token.is_(")") and state.parameter_depth:
            state.parameter_depth -= 1
            if state.parameter_depth == 0:
                state.close_parameters()
                return True

        if not state.expecting_parameter:
            return False

        if state.expecting_value:
            if token.is_(",") and state.parameter_depth == 1 and not state.value_depth:
                state.next_parameter()
                return True
            if token.is_("[") or token.is_("{"):
                state.value_depth += 1
            elif (token.is_("]") or token.is_("}")) and state.value_depth:
                state.value_depth -= 1
            self.append_value(token, symbols, state)
            return True

        if state.group_depth or (state.at_parameter_start and (token.is_("{") or token.is_("["))):
            self.parse_parameter_group(token, symbols, state)
            return True

        if token.is_(",") and not state.type_depth:
            state.next_parameter()
            return True

        if token.is_("=") and symbols.last_parameter is not None:
            state.expecting_value = True
            state.expecting_parameter_type = False
            state.value_end = -1
            return True

        consumed = self.parse_parameter(token, symbols, state)
        if consumed:
            state.at_parameter_start = False
        return consumed

    def parse_parameter(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        """Type-before-name parameter: ``int $bar``, ``$bar``."""
        value = token.value
        param = symbols.last_parameter

        # Array suffix on the type: Foo[] $bar
        if state.expecting_parameter_type and param is not None and param.type:
            if token.is_("["):
                param.type += "[]"
                return True
            if token.is_("]"):
                return True

        if state.expecting_parameter_type and self.is_variable_name(value):
            if param is not None:
                param.name = value
            state.expecting_parameter_type = False
            return True

        if not state.expecting_parameter_type and self.is_variable_name(value):
            symbols.add_parameter(name=value)
            return True

        if self.is_type(value) and not state.expecting_parameter_type:
            symbols.add_parameter(type=value)
            state.expecting_parameter_type = True
            return True

        return False

    def parse_parameter_group(self, token: Token, symbols: Symbols, state: ParseState):
        """Expand ``{a, b}`` / ``[a, b]`` into one parameter per bound name."""
        if token.is_("{") or token.is_("["):
            state.group_depth += 1
            state.group_expects_binding = True
            state.group_renaming = False
        elif token.is_("}") or token.is_("]"):
            state.group_depth -= 1
            state.group_expects_binding = False
            if state.group_depth == 0:
                state.group_closed = True
                state.at_parameter_start = False
        elif token.is_(","):
            state.group_expects_binding = True
            state.group_renaming = False
        elif token.is_(":"):
            state.group_renaming = True
        elif self.is_name(token.value) and (state.group_expects_binding or state.group_renaming):
            if state.group_renaming and symbols.last_parameter is not None:
                symbols.last_parameter.name = token.value
            else:
                symbols.add_parameter(name=token.value)
            state.group_expects_binding = False
            state.group_renaming = False
        else:
            # Default values and anything else inside a group are not bindings
            state.group_expects_binding = False
            state.group_renaming = False

    def append_value(self, token: Token, symbols: Symbols, state: ParseState):
        """Accumulate default value text, keeping source spacing."""
        param = symbols.last_parameter
        if param is None:
            return
        if param.value and token.start > state.value_end:
            param.value += " "
        param.value += token.value
        state.value_end = token.end

    def parse_variable(self, token: Token, symbols: Symbols, state: ParseState) -> bool:
        value = token.value

        if symbols.kind is SymbolKind.VARIABLE and state.expecting_name:
            if value:
                symbols.set_name(value)
                state.expecting_name = False
                state.done = True
            return True

        if symbols.kind is not None:
            return False

        if self.matches_grammar(value, "variable"):
            symbols.declare(SymbolKind.VARIABLE)
            state.expecting_name = True
            return True

        if not self.grammar.variable_keyword_required and self.is_variable_name(value):
            symbols.set_name(value)
            symbols.declare(SymbolKind.VARIABLE)
            if state.pending_type:
                symbols.returns.type = state.pending_type
            state.done = True
            return True

        if self.is_type(value):
            state.pending_type = value
            return True

        return False

    # -- Post-processing --------------------------------------------------

    def finalize(self, symbols: Symbols, state: ParseState):
        """Enforce record invariants once all tokens are consumed."""
        if symbols.kind is not SymbolKind.FUNCTION:
            symbols.parameters.clear()

        if symbols.kind is SymbolKind.VARIABLE:
            symbols.returns.present = False
        elif symbols.kind is None:
            symbols.returns.present = False

        if symbols.kind is SymbolKind.FUNCTION and symbols.returns.type in self.grammar.void_types:
            symbols.returns.present = False

        for param in symbols.parameters:
            param.type = self.format_type(param.type)
        symbols.returns.type = self.format_type(symbols.returns.type)

    def format_type(self, type: Optional[str]) -> Optional[str]:
        """Final transform applied to every captured type string."""
        return type

