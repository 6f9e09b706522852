"""Flatten a tree-sitter parse of one source line into lexical tokens."""

from dataclasses import dataclass

import structlog
from tree_sitter_language_pack import get_parser

from .languages import Grammar

logger = structlog.get_logger()


@dataclass(frozen=True)
class Token:
    """A lexical token.

    Punctuation and keywords come from anonymous tree-sitter nodes, so their
    ``type`` equals their text (``"("``, ``":"``, ``"function"``).
    """
    type: str                       # tree-sitter node type
    value: str                      # Source text
    start: int = 0                  # Start byte within the line
    end: int = 0                    # End byte within the line

    def is_(self, label: str) -> bool:
        """Check for a punctuation/keyword token by its literal."""
        return self.type == label


def lex(code: str, grammar: Grammar) -> list[Token]:
    """Tokenize a single line of code with the grammar's tree-sitter parser.

    Args:
        code: Source line
        grammar: Grammar table of the language

    Returns:
        Tokens in source order
    """
    prefix_bytes = grammar.source_prefix.encode("utf-8")
    source_bytes = prefix_bytes + code.encode("utf-8")

    parser = get_parser(grammar.ts_language)
    tree = parser.parse(source_bytes)

    tokens: list[Token] = []
    _walk_leaves(tree.root_node, grammar, source_bytes, len(prefix_bytes), tokens)
    tokens = _join_sigils(tokens, grammar.sigils)

    logger.debug("lexer.tokens", language=grammar.name, count=len(tokens))
    return tokens


def _walk_leaves(node, grammar: Grammar, source_bytes: bytes, offset: int, tokens: list):
    """Recursively collect leaf nodes left to right."""
    if node.type in grammar.skip_node_types:
        return

    # MISSING nodes inserted by error recovery have no source text
    if node.is_missing or node.start_byte == node.end_byte:
        return

    if node.child_count == 0 or node.type in grammar.atomic_node_types:
        # Anything overlapping the source prefix is not part of the line
        if node.start_byte < offset:
            return
        value = source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
        tokens.append(Token(
            type=node.type,
            value=value,
            start=node.start_byte - offset,
            end=node.end_byte - offset,
        ))
        return

    for child in node.children:
        _walk_leaves(child, grammar, source_bytes, offset, tokens)


def _join_sigils(tokens: list[Token], sigils: tuple[str, ...]) -> list[Token]:
    """Merge sigil tokens (``$``, ``?``, ``@``) with the adjacent next token.

    Grammars split ``$name`` into two leaves; the parsers expect one token.
    """
    if not sigils:
        return tokens

    result: list[Token] = []
    pending = None
    for token in tokens:
        if pending is not None:
            if token.start == pending.end:
                token = Token(
                    type=token.type,
                    value=pending.value + token.value,
                    start=pending.start,
                    end=token.end,
                )
            else:
                result.append(pending)
            pending = None

        if token.value in sigils:
            pending = token
            continue
        result.append(token)

    if pending is not None:
        result.append(pending)
    return result
