"""Parse declaration - structured summary of one line of code."""

from typing import Optional

from ..config import load_config
from ..errors import UnsupportedLanguageError
from ..parser import Symbols, get_parser


def parse_declaration(
    code: str,
    language: str,
    config_path: Optional[str] = None
) -> dict:
    """Parse a declaration line into name, kind, parameters and return info.

    Args:
        code: Single line of source code (function, class or variable)
        language: Language identifier (see list_languages)
        config_path: Custom config file path

    Returns:
        Dict with the parsed symbol
    """
    try:
        parser = get_parser(language, load_config(config_path))
    except UnsupportedLanguageError as e:
        return {"error": str(e)}

    symbols = parser.tokenize(code)

    return {
        "language": language,
        "symbol": symbol_to_dict(symbols),
    }


def symbol_to_dict(symbols: Symbols) -> dict:
    """Convert a Symbols record to output format."""
    return {
        "name": symbols.name,
        "kind": symbols.kind.value if symbols.kind else None,
        "parameters": [
            {"name": p.name, "type": p.type, "value": p.value}
            for p in symbols.parameters
        ],
        "return": {
            "present": symbols.returns.present,
            "type": symbols.returns.type,
        },
    }
