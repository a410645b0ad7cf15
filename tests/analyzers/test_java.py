"""Tests for the tree-sitter Java analyzer."""

from __future__ import annotations

import pytest

pytest.importorskip("tree_sitter_java")

from easydoc.analyzers.java import JavaSourceAnalyzer, _Source, presentable_type_name  # noqa: E402
from easydoc.models import ClassSignature, FieldSignature, MethodSignature, to_snapshot  # noqa: E402

SOURCE = """package com.example;

import java.io.IOException;

/**
 * Repository.
 */
public class UserRepository<T> {

    /** The cache. */
    private final Map<String, T> cache = new HashMap<>();

    public UserRepository() {
    }

    /**
     * Finds.
     * @param id the id
     */
    public <R> Optional<T> find(String id, R hint) throws IOException, java.sql.SQLException {
        return Optional.empty();
    }

    // not a doc comment
    void log(String... messages) {
    }

    interface Listener {
        void onEvent(String event);
    }
}
"""


@pytest.fixture(scope="module")
def symbols():
    return {symbol.qualified_name: symbol for symbol in JavaSourceAnalyzer().analyze(SOURCE)}


def test_analyze_finds_symbols_in_source_order() -> None:
    names = [symbol.qualified_name for symbol in JavaSourceAnalyzer().analyze(SOURCE)]

    assert names == [
        "UserRepository",
        "UserRepository.cache",
        "UserRepository.UserRepository",
        "UserRepository.find",
        "UserRepository.log",
        "UserRepository.Listener",
        "UserRepository.Listener.onEvent",
    ]


def test_class_symbol_carries_comment_and_type_parameters(symbols) -> None:
    repository = symbols["UserRepository"]

    assert repository.kind == "class"
    assert repository.comment == "/**\n * Repository.\n */"
    assert repository.indent == ""
    assert repository.signature == ClassSignature(type_parameters=("T",), components=())
    assert to_snapshot(repository.signature).valid_param_keys == frozenset({"<T>"})


def test_comment_span_points_into_source(symbols) -> None:
    for symbol in symbols.values():
        if symbol.comment_span is None:
            continue
        start, end = symbol.comment_span
        assert SOURCE[start:end] == symbol.comment


def test_method_signature_reflects_declaration(symbols) -> None:
    find = symbols["UserRepository.find"]

    assert find.kind == "method"
    assert find.indent == "    "
    assert find.return_type == "Optional<T>"
    assert find.exceptions == ["IOException", "SQLException"]
    assert [parameter.name for parameter in find.parameters] == ["<R>", "id", "hint"]
    assert find.signature == MethodSignature(
        parameters=("id", "hint"),
        type_parameters=("R",),
        exceptions=("IOException", "SQLException"),
        has_return=True,
    )


def test_constructor_and_void_methods_have_no_return(symbols) -> None:
    assert symbols["UserRepository.UserRepository"].return_type is None
    assert symbols["UserRepository.log"].signature.has_return is False


def test_line_comments_are_not_doc_comments(symbols) -> None:
    log = symbols["UserRepository.log"]

    assert log.comment is None
    assert log.comment_span is None
    assert [parameter.name for parameter in log.parameters] == ["messages"]


def test_field_symbol_uses_first_declarator(symbols) -> None:
    cache = symbols["UserRepository.cache"]

    assert cache.kind == "field"
    assert cache.comment == "/** The cache. */"
    assert cache.signature == FieldSignature()
    assert cache.parameters[0].type_name == "Map<String, T>"


def test_record_components_become_class_parameters() -> None:
    source = "/** A point. */\npublic record Point(int x, int y) {}\n"

    (point,) = JavaSourceAnalyzer().analyze(source)

    assert point.kind == "class"
    assert point.signature == ClassSignature(type_parameters=(), components=("x", "y"))


def test_enum_members_are_discovered() -> None:
    source = "enum Color {\n    RED, GREEN;\n\n    int code() {\n        return 1;\n    }\n}\n"

    names = [symbol.qualified_name for symbol in JavaSourceAnalyzer().analyze(source)]

    assert names == ["Color", "Color.code"]


def test_offsets_are_character_based_with_non_ascii_text() -> None:
    source = "/** Grüße. */\nclass Greeting {\n    /** Ünïcode. */\n    int size;\n}\n"

    symbols = JavaSourceAnalyzer().analyze(source)
    field = symbols[1]
    start, end = field.comment_span

    assert source[start:end] == "/** Ünïcode. */"
    assert source[field.start :].startswith("int size;")


def test_source_offsets_map_bytes_to_characters() -> None:
    text = "aé€b"
    src = _Source(text)

    assert [src.offset(index) for index in (0, 1, 3, 6, 7)] == [0, 1, 2, 3, 4]
    assert _Source("plain").offset(5) == 5


def test_presentable_type_name_strips_packages_and_generics() -> None:
    assert presentable_type_name("java.io.IOException") == "IOException"
    assert presentable_type_name("Result<String>") == "Result"
