"""Tests for tools module."""

import pytest

from docblockr_mcp.config import CONFIG_ENV_VAR
from docblockr_mcp.tools.list_languages import list_languages
from docblockr_mcp.tools.parse_declaration import parse_declaration
from docblockr_mcp.tools.render_docblock import render_docblock


@pytest.fixture(autouse=True)
def no_ambient_config(tmp_path, monkeypatch):
    """Keep a developer's config file out of the results."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


def test_render_docblock():
    """Test rendering the docblock for a JavaScript function."""
    result = render_docblock("function foo(bar) {", "javascript")

    assert result["language"] == "javascript"
    assert result["symbol"]["name"] == "foo"
    assert result["docblock"] == "\n".join([
        "/**",
        " * ${1:[foo description]}",
        " *",
        " * @param   {${2:[type]}}  bar  ${3:[bar description]}",
        " *",
        " * @return  {${4:[type]}}       ${5:[return description]}",
        " */",
    ])


def test_render_docblock_with_config_file(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text('default_return_tag = false\n\n[comments.php]\nopen = "/*"\n')

    result = render_docblock("function foo($bar) {", "php", config_path=str(path))

    assert result["docblock"].startswith("/*\n")
    assert "@return" not in result["docblock"]
    assert "\\$bar" in result["docblock"]


def test_render_docblock_variable():
    result = render_docblock("let foo;", "typescript")

    assert result["symbol"]["kind"] == "variable"
    assert result["docblock"] == "/**\n * ${1:[foo description]}\n */"


def test_render_docblock_unknown_language():
    result = render_docblock("function foo() {", "cobol")

    assert result == {"error": "This language is not supported: cobol"}


def test_parse_declaration():
    result = parse_declaration("function foo($arg1, $arg2) {", "php")

    assert result["language"] == "php"
    symbol = result["symbol"]
    assert symbol["name"] == "foo"
    assert symbol["kind"] == "function"
    assert [p["name"] for p in symbol["parameters"]] == ["$arg1", "$arg2"]
    assert symbol["return"] == {"present": True, "type": None}


def test_parse_declaration_parameters():
    result = parse_declaration("function foo(int $bar = 0, $baz) {", "php")

    assert result["symbol"] == {
        "name": "foo",
        "kind": "function",
        "parameters": [
            {"name": "$bar", "type": "int", "value": "0"},
            {"name": "$baz", "type": None, "value": ""},
        ],
        "return": {"present": True, "type": None},
    }


def test_parse_declaration_unknown_language():
    assert "error" in parse_declaration("x", "fortran")


def test_list_languages():
    result = list_languages()

    assert result["count"] == 7
    ids = [entry["language"] for entry in result["languages"]]
    assert ids == ["c", "java", "javascript", "php", "scss", "typescript", "vue"]
    vue = next(entry for entry in result["languages"] if entry["language"] == "vue")
    assert vue["grammar"] == "typescript"
