"""Grammar tables for all supported languages."""

import re
from dataclasses import dataclass, field
from typing import Optional

from ..errors import GrammarError


@dataclass(frozen=True)
class CommentStyle:
    """Delimiters used to wrap a rendered docblock."""
    open: str = "/**"
    separator: str = " * "          # Prefix for every line inside the block
    close: str = " */"
    eos: str = "\n"                 # End-of-line convention


# Grammar categories accepted by Grammar.matches()
CATEGORIES = ("class", "function", "modifier", "variable", "type")


@dataclass(frozen=True)
class Grammar:
    """Static keyword, type and tokenizer data for one language."""
    # Language name, used as the key for configuration overrides
    name: str

    # tree-sitter language name (for tree-sitter-language-pack)
    ts_language: str

    # Keywords introducing each kind of declaration
    class_keywords: frozenset[str] = frozenset()
    function_keywords: frozenset[str] = frozenset()
    variable_keywords: frozenset[str] = frozenset()

    # Visibility/storage keywords skipped when searching for a name
    modifier_keywords: frozenset[str] = frozenset()

    # Primitive/built-in type names
    builtin_types: frozenset[str] = frozenset()

    # Pattern an identifier token must satisfy
    identifier: str = r"[a-zA-Z_$][a-zA-Z0-9_$]*"

    # Whether variables need a declaration keyword (let, const, ...)
    variable_keyword_required: bool = True

    # Return types meaning "returns nothing"
    void_types: frozenset[str] = frozenset()

    comment: CommentStyle = field(default_factory=CommentStyle)

    # Tag rendered for variables, None if the language does not use one
    variable_tag: Optional[str] = "@var"

    # Tokenizer hints:
    # node types emitted as one token with their full source text
    atomic_node_types: frozenset[str] = frozenset()
    # node types dropped from the token stream
    skip_node_types: frozenset[str] = frozenset({"comment"})
    # single-character tokens merged with an adjacent following token
    sigils: tuple[str, ...] = ()
    # text prepended before parsing (and removed from the token stream)
    source_prefix: str = ""

    def __post_init__(self):
        for category, words in self.keywords_by_category().items():
            overlap = words & self.builtin_types
            if overlap:
                raise GrammarError(
                    f"{self.name}: {category} keywords are also built-in types: "
                    + ", ".join(sorted(overlap))
                )

    def keywords_by_category(self) -> dict[str, frozenset[str]]:
        return {
            "class": self.class_keywords,
            "function": self.function_keywords,
            "modifier": self.modifier_keywords,
            "variable": self.variable_keywords,
        }

    @property
    def keywords(self) -> frozenset[str]:
        """All reserved keywords across declaration categories."""
        return (
            self.class_keywords
            | self.function_keywords
            | self.modifier_keywords
            | self.variable_keywords
        )

    def matches(self, value: Optional[str], category: Optional[str] = None) -> bool:
        """Check whether a token text belongs to a grammar category.

        Without a category, checks every category including built-in types.
        """
        if category is not None and category not in CATEGORIES:
            raise ValueError(f"Unknown grammar category: {category}")
        if not value:
            return False
        if category is None:
            return value in self.keywords or value in self.builtin_types
        if category == "type":
            return value in self.builtin_types
        return value in self.keywords_by_category()[category]

    def matches_identifier(self, value: Optional[str]) -> bool:
        """True if the token text starts with an identifier."""
        return bool(value) and re.match(self.identifier, value) is not None

    def is_identifier(self, value: Optional[str]) -> bool:
        """True if the whole token text is an identifier."""
        return bool(value) and re.fullmatch(self.identifier, value) is not None


PHP_GRAMMAR = Grammar(
    name="php",
    ts_language="php",
    class_keywords=frozenset({"class", "trait", "interface"}),
    function_keywords=frozenset({"function"}),
    variable_keywords=frozenset({"const"}),
    modifier_keywords=frozenset({
        "public", "static", "protected", "private", "abstract", "final", "readonly",
    }),
    builtin_types=frozenset({
        "self", "array", "callable", "bool", "boolean", "float", "int", "integer",
        "string", "iterable", "object", "mixed", "void", "null", "stdClass",
    }),
    identifier=r"[a-zA-Z0-9_$\x7f-\xff]+",
    variable_keyword_required=False,
    void_types=frozenset({"void"}),
    atomic_node_types=frozenset({
        "variable_name", "optional_type", "qualified_name", "string",
        "encapsed_string",
    }),
    sigils=("$", "?"),
    source_prefix="<?php ",
)


TYPESCRIPT_GRAMMAR = Grammar(
    name="typescript",
    ts_language="typescript",
    class_keywords=frozenset({"class", "interface"}),
    function_keywords=frozenset({"function"}),
    variable_keywords=frozenset({"let", "const", "var"}),
    modifier_keywords=frozenset({
        "public", "private", "protected", "static", "readonly", "abstract",
        "async", "export", "default", "declare", "override", "get", "set",
    }),
    builtin_types=frozenset({
        "any", "number", "boolean", "string", "symbol", "void", "unknown",
        "never", "object", "bigint", "undefined", "null",
    }),
    void_types=frozenset({"void"}),
    variable_tag=None,
    atomic_node_types=frozenset({
        "array_type", "generic_type", "union_type", "object_type",
        "function_type", "tuple_type", "string", "template_string", "regex",
    }),
)


JAVASCRIPT_GRAMMAR = Grammar(
    name="javascript",
    ts_language="javascript",
    class_keywords=frozenset({"class"}),
    function_keywords=frozenset({"function"}),
    variable_keywords=frozenset({"let", "const", "var"}),
    modifier_keywords=frozenset({"static", "async", "export", "default", "get", "set"}),
    variable_tag=None,
    atomic_node_types=frozenset({"string", "template_string", "regex"}),
)


C_GRAMMAR = Grammar(
    name="c",
    ts_language="c",
    modifier_keywords=frozenset({
        "static", "extern", "inline", "const", "volatile", "register", "auto",
        "restrict",
    }),
    builtin_types=frozenset({
        "void", "char", "short", "int", "long", "float", "double", "signed",
        "unsigned", "bool", "_Bool", "size_t", "struct", "union", "enum",
    }),
    identifier=r"[a-zA-Z_][a-zA-Z0-9_]*",
    variable_keyword_required=False,
    void_types=frozenset({"void"}),
    atomic_node_types=frozenset({"string_literal", "char_literal"}),
)


JAVA_GRAMMAR = Grammar(
    name="java",
    ts_language="java",
    class_keywords=frozenset({"class", "interface", "enum", "record"}),
    modifier_keywords=frozenset({
        "public", "private", "protected", "static", "final", "abstract",
        "synchronized", "native", "transient", "volatile", "strictfp", "default",
    }),
    builtin_types=frozenset({
        "void", "boolean", "byte", "char", "short", "int", "long", "float",
        "double", "var",
    }),
    identifier=r"[a-zA-Z_$][a-zA-Z0-9_$]*",
    variable_keyword_required=False,
    void_types=frozenset({"void"}),
    atomic_node_types=frozenset({
        "generic_type", "array_type", "marker_annotation", "annotation",
        "string_literal", "character_literal",
    }),
    sigils=("@",),
)


SCSS_GRAMMAR = Grammar(
    name="scss",
    ts_language="scss",
    function_keywords=frozenset({"@function", "@mixin"}),
    identifier=r"[a-zA-Z_$-][a-zA-Z0-9_-]*",
    variable_keyword_required=False,
    variable_tag="@type",
    atomic_node_types=frozenset({"integer_value", "float_value"}),
    sigils=("$", "@"),
)
