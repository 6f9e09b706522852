"""Render docblock - documentation comment template for one line of code."""

from typing import Optional

from ..config import load_config
from ..errors import UnsupportedLanguageError
from ..parser import get_parser
from .parse_declaration import symbol_to_dict


def render_docblock(
    code: str,
    language: str,
    config_path: Optional[str] = None
) -> dict:
    """Render the docblock snippet to insert above a declaration.

    Args:
        code: Single line of source code (function, class or variable)
        language: Language identifier (see list_languages)
        config_path: Custom config file path

    Returns:
        Dict with the parsed symbol and the docblock snippet text
    """
    config = load_config(config_path)
    try:
        parser = get_parser(language, config)
    except UnsupportedLanguageError as e:
        return {"error": str(e)}

    symbols = parser.tokenize(code)
    docblock = parser.render_symbols(symbols)

    return {
        "language": language,
        "symbol": symbol_to_dict(symbols),
        "docblock": docblock,
    }
