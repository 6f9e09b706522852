"""Render a symbol record as a docblock with ``${N:text}`` tab stops.

Default layout, with every field of a tag row starting at the same column:

    /**
     * ${1:[foo description]}
     *
     * @param   {${2:[type]}}  bar  ${3:[bar description]}
     *
     * @return  {${4:[type]}}       ${5:[return description]}
     */

The "drupal" layout drops the braces and the alignment and moves each
description onto its own indented line.
"""

import re
from typing import Optional

from ..config import Config
from ..parser.languages import CommentStyle
from ..parser.symbols import SymbolKind, Symbols

# Characters with a meaning inside editor snippets
SNIPPET_SPECIAL = re.compile(r"([\\$}])")

TYPE_PLACEHOLDER = "[type]"
RETURN_DESCRIPTION = "[return description]"


def escape(text: str) -> str:
    """Backslash-escape snippet syntax characters."""
    return SNIPPET_SPECIAL.sub(r"\\\1", text)


class Placeholders:
    """Numbers tab stops in the order they are emitted, starting at 1."""

    def __init__(self):
        self.count = 0

    def __call__(self, text: str) -> str:
        self.count += 1
        return f"${{{self.count}:{escape(text)}}}"


class Cell:
    """One column of a tag row: rendered text plus its visible width."""

    def __init__(self, text: str, width: int):
        self.text = text
        self.width = width

    @classmethod
    def plain(cls, text: str) -> "Cell":
        return cls(escape(text), len(text))

    @classmethod
    def braced(cls, placeholder: str, text: str) -> "Cell":
        # Width excludes the "${N:" ... "}" wrapper, which the editor removes
        return cls("{" + placeholder + "}", len(text) + 2)


def render_block(
    symbols: Symbols,
    config: Optional[Config] = None,
    comment: Optional[CommentStyle] = None,
    variable_tag: Optional[str] = None,
) -> str:
    """Render a docblock template for a parsed declaration.

    Args:
        symbols: Parsed symbol record
        config: Rendering options (column spacing, return tag, comment style)
        comment: Delimiters wrapping the block
        variable_tag: Tag emitted for variables, e.g. "@var"; None for no tag

    Returns:
        The comment text, lines joined with the comment's end-of-line string
    """
    config = config or Config()
    comment = comment or CommentStyle()
    placeholder = Placeholders()

    lines = [placeholder(f"[{symbols.name} description]")]

    if config.comment_style == "drupal":
        lines.extend(_drupal_tags(symbols, config, placeholder, variable_tag))
    else:
        lines.extend(_aligned_tags(symbols, config, placeholder, variable_tag))

    body = [
        (comment.separator + line) if line else comment.separator.rstrip()
        for line in lines
    ]
    return comment.eos.join([comment.open, *body, comment.close])


def _shows_return(symbols: Symbols, config: Config) -> bool:
    return (
        symbols.returns.present
        and config.default_return_tag
        and symbols.kind is not SymbolKind.VARIABLE
    )


def _aligned_tags(symbols, config, placeholder, variable_tag) -> list[str]:
    """Tag rows padded into columns: tag, {type}, name, description."""
    rows: list[list[Cell]] = []
    sections: list[list[list[Cell]]] = []

    if symbols.kind is SymbolKind.FUNCTION and symbols.parameters:
        params = []
        for param in symbols.parameters:
            type_text = param.type or TYPE_PLACEHOLDER
            params.append([
                Cell.plain("@param"),
                Cell.braced(placeholder(type_text), type_text),
                Cell.plain(param.name),
                Cell(placeholder(f"[{param.name} description]"), 0),
            ])
        sections.append(params)
        rows.extend(params)

    if _shows_return(symbols, config):
        type_text = symbols.returns.type or TYPE_PLACEHOLDER
        row = [
            Cell.plain("@return"),
            Cell.braced(placeholder(type_text), type_text),
        ]
        if symbols.parameters:
            # Skip the name column so the description lines up
            row.append(Cell("", 0))
        row.append(Cell(placeholder(RETURN_DESCRIPTION), 0))
        sections.append([row])
        rows.append(row)

    if symbols.kind is SymbolKind.VARIABLE and variable_tag:
        type_text = symbols.returns.type or TYPE_PLACEHOLDER
        row = [
            Cell.plain(variable_tag),
            Cell.braced(placeholder(type_text), type_text),
        ]
        sections.append([row])
        rows.append(row)

    widths = _column_widths(rows)
    lines = []
    for section in sections:
        lines.append("")
        for row in section:
            lines.append(_join_row(row, widths, config.column_spacing))
    return lines


def _column_widths(rows: list[list["Cell"]]) -> list[int]:
    widths: list[int] = []
    for row in rows:
        for i, cell in enumerate(row):
            if i == len(widths):
                widths.append(0)
            widths[i] = max(widths[i], cell.width)
    return widths


def _join_row(row: list["Cell"], widths: list[int], spacing: int) -> str:
    """Pad every cell but the last to its column width plus the spacing."""
    parts = []
    for i, cell in enumerate(row[:-1]):
        parts.append(cell.text + " " * (widths[i] - cell.width + spacing))
    parts.append(row[-1].text)
    return "".join(parts)


def _drupal_tags(symbols, config, placeholder, variable_tag) -> list[str]:
    """Unaligned tags with descriptions on their own indented line."""
    lines = []

    if symbols.kind is SymbolKind.FUNCTION and symbols.parameters:
        lines.append("")
        for param in symbols.parameters:
            type_text = placeholder(param.type or TYPE_PLACEHOLDER)
            lines.append(f"@param {type_text} {escape(param.name)}")
            lines.append("  " + placeholder(f"[{param.name} description]"))

    if _shows_return(symbols, config):
        lines.append("")
        lines.append(f"@return {placeholder(symbols.returns.type or TYPE_PLACEHOLDER)}")
        lines.append("  " + placeholder(RETURN_DESCRIPTION))

    if symbols.kind is SymbolKind.VARIABLE and variable_tag:
        lines.append("")
        lines.append(f"{variable_tag} {placeholder(symbols.returns.type or TYPE_PLACEHOLDER)}")

    return lines
