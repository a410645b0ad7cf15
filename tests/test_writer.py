"""Tests for applying and removing comments in source text."""

from __future__ import annotations

from easydoc.models import DocumentedSymbol
from easydoc.writer import CommentEdit, apply_comments, format_comment, remove_comments


def _symbol(source: str, marker: str, *, comment: str | None = None, indent: str = "    ") -> DocumentedSymbol:
    start = source.index(marker)
    span = None
    if comment is not None:
        comment_start = source.index(comment)
        span = (comment_start, comment_start + len(comment))
    return DocumentedSymbol(
        kind="method",
        name=marker,
        qualified_name=marker,
        language="java",
        start=start,
        indent=indent,
        text=marker,
        comment=comment,
        comment_span=span,
    )


def test_format_comment_reindents_lines() -> None:
    text = "/**\n* Adds.\n   *\n * @return sum\n*/"

    assert format_comment(text, "    ") == "/**\n     * Adds.\n     *\n     * @return sum\n     */"


def test_format_comment_prefixes_bare_lines() -> None:
    assert format_comment("/**\nplain\n*/", "") == "/**\n * plain\n */"


def test_apply_comments_inserts_and_replaces() -> None:
    old = "/** Old. */"
    source = f"class A {{\n    {old}\n    int a;\n\n    void run() {{}}\n}}\n"
    field = _symbol(source, "int a;", comment=old)
    method = _symbol(source, "void run()")

    updated = apply_comments(
        source,
        [
            CommentEdit(symbol=field, text="/**\n * New.\n */"),
            CommentEdit(symbol=method, text="/**\n * Runs.\n */"),
        ],
    )

    assert updated == (
        "class A {\n"
        "    /**\n"
        "     * New.\n"
        "     */\n"
        "    int a;\n"
        "\n"
        "    /**\n"
        "     * Runs.\n"
        "     */\n"
        "    void run() {}\n"
        "}\n"
    )


def test_remove_comments_deletes_blocks_and_gap() -> None:
    doc = "/**\n     * Runs.\n     */"
    source = f"class A {{\n    {doc}\n    void run() {{}}\n\n    void stop() {{}}\n}}\n"
    run = _symbol(source, "void run()", comment=doc)
    stop = _symbol(source, "void stop()")

    assert remove_comments(source, [run, stop]) == (
        "class A {\n    void run() {}\n\n    void stop() {}\n}\n"
    )
