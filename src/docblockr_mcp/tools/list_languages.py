"""List languages - identifiers accepted by the other tools."""

from ..parser import LANGUAGE_REGISTRY


def list_languages() -> dict:
    """List supported language identifiers.

    Returns:
        Dict with each language id and the grammar used to parse it
    """
    languages = [
        {"language": language, "grammar": parser_class.grammar.name}
        for language, parser_class in sorted(LANGUAGE_REGISTRY.items())
    ]
    return {
        "count": len(languages),
        "languages": languages,
    }
