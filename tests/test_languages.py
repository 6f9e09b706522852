"""Tests for the per-language parsers, tokenized with tree-sitter."""

import pytest

from docblockr_mcp.config import Config
from docblockr_mcp.parser import SymbolKind, get_parser


# --- PHP ---

def test_php_variable():
    symbols = get_parser("php").tokenize("$foo = 5")

    assert symbols.name == "$foo"
    assert symbols.kind is SymbolKind.VARIABLE
    assert symbols.parameters == []
    assert symbols.returns.present is False


def test_php_function():
    symbols = get_parser("php").tokenize("function foo() {")

    assert symbols.name == "foo"
    assert symbols.kind is SymbolKind.FUNCTION
    assert symbols.parameters == []
    assert symbols.returns.present is True


def test_php_function_with_arguments():
    symbols = get_parser("php").tokenize("function foo($arg1, $arg2) {")

    assert symbols.name == "foo"
    assert [p.name for p in symbols.parameters] == ["$arg1", "$arg2"]
    assert all(p.type is None and p.value == "" for p in symbols.parameters)
    assert symbols.returns.present is True


def test_php_typed_argument_with_default():
    """Test a typed parameter keeps its default value text."""
    symbols = get_parser("php").tokenize("function foo(int $bar = 0) {")

    assert len(symbols.parameters) == 1
    param = symbols.parameters[0]
    assert param.name == "$bar"
    assert param.type == "int"
    assert param.value == "0"


def test_php_return_type():
    symbols = get_parser("php").tokenize("function foo(): boolean {")

    assert symbols.returns.present is True
    assert symbols.returns.type == "boolean"


def test_php_void_return_type():
    symbols = get_parser("php").tokenize("function foo(): void {")

    assert symbols.kind is SymbolKind.FUNCTION
    assert symbols.returns.present is False


def test_php_class():
    """Test PHP classes never get a return tag."""
    symbols = get_parser("php").tokenize("class Bar {")

    assert symbols.name == "Bar"
    assert symbols.kind is SymbolKind.CLASS
    assert symbols.parameters == []
    assert symbols.returns.present is False


def test_php_class_method():
    symbols = get_parser("php").tokenize("public function foo($arg1, $arg2) {")

    assert symbols.name == "foo"
    assert symbols.kind is SymbolKind.FUNCTION
    assert [p.name for p in symbols.parameters] == ["$arg1", "$arg2"]


def test_php_nullable_parameter_as_union():
    symbols = get_parser("php").tokenize("function foo(?int $bar) {")

    assert symbols.parameters[0].type == "int|null"


def test_php_nullable_parameter_as_mixed():
    config = Config(php_mixed_union_types=True)
    symbols = get_parser("php", config).tokenize("function foo(?int $bar) {")

    assert symbols.parameters[0].type == "mixed"


def test_php_nullable_return_type():
    assert get_parser("php").tokenize("function foo(): ?Foo {").returns.type == "Foo|null"

    config = Config(php_mixed_union_types=True)
    assert get_parser("php", config).tokenize("function foo(): ?Foo {").returns.type == "mixed"


def test_php_nullable_array_suffix():
    """Test the array suffix stays on the base type."""
    parser = get_parser("php")

    assert parser.format_type("?Foo[]") == "Foo[]|null"
    assert parser.format_type("Foo[]") == "Foo[]"

    symbols = parser.tokenize("public function foo(?Foo[] $x) {")
    assert [(p.name, p.type) for p in symbols.parameters] == [("$x", "Foo[]|null")]

    config = Config(php_mixed_union_types=True)
    symbols = get_parser("php", config).tokenize("public function foo(?Foo[] $x) {")
    assert symbols.parameters[0].type == "mixed"


def test_php_array_defaults():
    """Test commas inside an array default do not start a new parameter."""
    symbols = get_parser("php").tokenize("function foo(array $a = [1, 2], $b = null) {")

    assert [(p.name, p.type, p.value) for p in symbols.parameters] == [
        ("$a", "array", "[1, 2]"),
        ("$b", None, "null"),
    ]


# --- TypeScript / JavaScript ---

@pytest.mark.parametrize("language", ["typescript", "javascript", "vue"])
def test_ts_variable(language):
    parser = get_parser(language)

    for source in ("let foo = 5;", "let foo;"):
        symbols = parser.tokenize(source)
        assert symbols.name == "foo"
        assert symbols.kind is SymbolKind.VARIABLE
        assert symbols.parameters == []
        assert symbols.returns.present is False


@pytest.mark.parametrize("language", ["typescript", "javascript"])
def test_ts_function_with_arguments(language):
    symbols = get_parser(language).tokenize("function foo(bar, fizz, buzz) {")

    assert symbols.name == "foo"
    assert symbols.kind is SymbolKind.FUNCTION
    assert [p.name for p in symbols.parameters] == ["bar", "fizz", "buzz"]
    assert symbols.returns.present is True


def test_ts_typed_arguments():
    symbols = get_parser("typescript").tokenize("function foo(bar: number, fizz: string[]) {")

    assert [(p.name, p.type) for p in symbols.parameters] == [
        ("bar", "number"),
        ("fizz", "string[]"),
    ]


def test_ts_destructured_arguments():
    symbols = get_parser("typescript").tokenize("function foo({bar, fizz, buzz}) {")

    assert len(symbols.parameters) == 3
    assert all(p.name and p.type is None for p in symbols.parameters)


def test_ts_return_types():
    parser = get_parser("typescript")

    assert parser.tokenize("function foo(): boolean {").returns.type == "boolean"
    assert parser.tokenize("function foo(): Array<number> {").returns.type == "Array<number>"
    assert parser.tokenize("function foo(): number[] {").returns.type == "number[]"


def test_ts_void_return_type():
    symbols = get_parser("typescript").tokenize("function foo(): void {")

    assert symbols.returns.present is False


def test_ts_class():
    symbols = get_parser("typescript").tokenize("class Bar {")

    assert symbols.name == "Bar"
    assert symbols.kind is SymbolKind.CLASS
    assert symbols.parameters == []


def test_ts_function_expression_assigned_to_property():
    symbols = get_parser("typescript").tokenize(
        "Fizz.buzz.foo = function (bar: number): boolean {"
    )

    assert symbols.name == "foo"
    assert symbols.kind is SymbolKind.FUNCTION
    assert [(p.name, p.type) for p in symbols.parameters] == [("bar", "number")]
    assert symbols.returns.type == "boolean"


def test_ts_object_default():
    symbols = get_parser("typescript").tokenize("function foo(a = {x: 1, y: 2}, b) {")

    assert [(p.name, p.value) for p in symbols.parameters] == [("a", "{x: 1, y: 2}"), ("b", "")]


def test_js_array_default():
    symbols = get_parser("javascript").tokenize("function foo(a = [x, y], b) {")

    assert [(p.name, p.value) for p in symbols.parameters] == [("a", "[x, y]"), ("b", "")]


def test_js_arrow_function():
    symbols = get_parser("javascript").tokenize("const foo = (bar, baz) => {")

    assert symbols.name == "foo"
    assert symbols.kind is SymbolKind.FUNCTION
    assert [p.name for p in symbols.parameters] == ["bar", "baz"]


# --- C ---

def test_c_function():
    symbols = get_parser("c").tokenize("int add(int a, int b) {")

    assert symbols.name == "add"
    assert symbols.kind is SymbolKind.FUNCTION
    assert [(p.name, p.type) for p in symbols.parameters] == [("a", "int"), ("b", "int")]
    assert symbols.returns.present is True
    assert symbols.returns.type == "int"


def test_c_void_function():
    """Test void returns and (void) parameter lists."""
    symbols = get_parser("c").tokenize("void reset(void);")

    assert symbols.name == "reset"
    assert symbols.parameters == []
    assert symbols.returns.present is False


def test_c_pointer_and_struct_types():
    symbols = get_parser("c").tokenize("struct point *make_point(const char *label, int x) {")

    assert symbols.name == "make_point"
    assert symbols.returns.type == "struct point*"
    assert [(p.name, p.type) for p in symbols.parameters] == [
        ("label", "char*"),
        ("x", "int"),
    ]


def test_c_variables():
    parser = get_parser("c")

    symbols = parser.tokenize("unsigned long count;")
    assert symbols.name == "count"
    assert symbols.kind is SymbolKind.VARIABLE
    assert symbols.returns.type == "unsigned long"
    assert symbols.returns.present is False

    symbols = parser.tokenize('static const char *name = "x";')
    assert symbols.name == "name"
    assert symbols.returns.type == "char*"


# --- Java ---

def test_java_method():
    symbols = get_parser("java").tokenize("public static int add(int a, int b) {")

    assert symbols.name == "add"
    assert symbols.kind is SymbolKind.FUNCTION
    assert [(p.name, p.type) for p in symbols.parameters] == [("a", "int"), ("b", "int")]
    assert symbols.returns.type == "int"
    assert symbols.returns.present is True


def test_java_constructor_has_no_return():
    symbols = get_parser("java").tokenize("public Point(String label) {")

    assert symbols.name == "Point"
    assert symbols.kind is SymbolKind.FUNCTION
    assert [(p.name, p.type) for p in symbols.parameters] == [("label", "String")]
    assert symbols.returns.present is False


def test_java_class():
    symbols = get_parser("java").tokenize("public final class Point {")

    assert symbols.name == "Point"
    assert symbols.kind is SymbolKind.CLASS


def test_java_generic_and_array_types():
    parser = get_parser("java")

    symbols = parser.tokenize("private List<String> names = new ArrayList<>();")
    assert symbols.name == "names"
    assert symbols.kind is SymbolKind.VARIABLE
    assert symbols.returns.type == "List<String>"

    symbols = parser.tokenize("public int[] values() {")
    assert symbols.name == "values"
    assert symbols.returns.type == "int[]"


def test_java_varargs():
    symbols = get_parser("java").tokenize("public void run(String... args) {")

    assert symbols.name == "run"
    assert [(p.name, p.type) for p in symbols.parameters] == [("args", "String...")]
    assert symbols.returns.present is False


# --- SCSS ---

def test_scss_function():
    symbols = get_parser("scss").tokenize("@function double($n) {")

    assert symbols.name == "double"
    assert symbols.kind is SymbolKind.FUNCTION
    assert [p.name for p in symbols.parameters] == ["$n"]
    assert symbols.returns.present is True


def test_scss_mixin_with_defaults():
    """Test mixins have no return and keep parameter defaults."""
    symbols = get_parser("scss").tokenize("@mixin theme($color: red, $size) {")

    assert symbols.name == "theme"
    assert symbols.kind is SymbolKind.FUNCTION
    assert [(p.name, p.value) for p in symbols.parameters] == [("$color", "red"), ("$size", "")]
    assert symbols.returns.present is False


def test_scss_default_with_unit():
    """Test numbers with units are kept whole."""
    symbols = get_parser("scss").tokenize("@function foo($a, $b: 10px) {")

    assert [(p.name, p.value) for p in symbols.parameters] == [("$a", ""), ("$b", "10px")]


def test_scss_variable():
    symbols = get_parser("scss").tokenize("$primary: #333;")

    assert symbols.name == "$primary"
    assert symbols.kind is SymbolKind.VARIABLE
    assert symbols.returns.present is False


# --- All languages ---

@pytest.mark.parametrize("language, source", [
    ("c", "int foo;"),
    ("java", "int foo;"),
    ("javascript", "let foo;"),
    ("php", "$foo;"),
    ("scss", "$foo: 1;"),
    ("typescript", "let foo;"),
    ("vue", "let foo;"),
])
def test_bare_variable_declaration(language, source):
    symbols = get_parser(language).tokenize(source)

    assert symbols.kind is SymbolKind.VARIABLE
    assert symbols.parameters == []
    assert symbols.returns.present is False


@pytest.mark.parametrize("language", ["c", "java", "javascript", "php", "scss", "typescript"])
def test_garbage_input_does_not_raise(language):
    symbols = get_parser(language).tokenize(")))) {{ ;; ==")

    assert symbols.parameters == []
