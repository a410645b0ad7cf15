"""Tree-sitter powered Java symbol analyzer."""

from __future__ import annotations

from bisect import bisect_left
from typing import Iterable, List, Optional, Tuple

import tree_sitter_java
from tree_sitter import Language, Node, Parser

from .base import SourceAnalyzer
from ..models import (
    ClassSignature,
    DocumentedSymbol,
    FieldSignature,
    MethodSignature,
    ParameterInfo,
)

_TYPE_DECLARATIONS = {
    "class_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
    "annotation_type_declaration",
}
_METHOD_DECLARATIONS = {
    "method_declaration",
    "constructor_declaration",
    "compact_constructor_declaration",
}
_FIELD_DECLARATIONS = {"field_declaration", "constant_declaration"}
_COMMENT_NODES = {"block_comment", "comment"}
_MEMBER_CONTAINERS = {"enum_body_declarations"}

JAVA_LANGUAGE = Language(tree_sitter_java.language())


class _Source:
    """Source text plus byte -> character offset conversion."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.data = text.encode("utf-8")
        # Byte offset at which each character starts; empty for pure ASCII.
        self._char_starts: List[int] = []
        if len(self.data) != len(text):
            position = 0
            for char in text:
                self._char_starts.append(position)
                position += len(char.encode("utf-8"))

    def node_text(self, node: Node) -> str:
        return self.data[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def offset(self, byte_offset: int) -> int:
        if not self._char_starts:
            return byte_offset
        return bisect_left(self._char_starts, byte_offset)


class JavaSourceAnalyzer(SourceAnalyzer):
    """Extracts classes, methods and fields with their Javadoc and signature."""

    language = "java"
    suffixes = (".java",)

    def __init__(self) -> None:
        self._parser = Parser(JAVA_LANGUAGE)

    def analyze(self, source: str) -> List[DocumentedSymbol]:
        src = _Source(source)
        tree = self._parser.parse(src.data)
        return list(self._walk(tree.root_node, src, []))

    def _walk(self, node: Node, src: _Source, scope: List[str]) -> Iterable[DocumentedSymbol]:
        for child in node.named_children:
            if child.type in _TYPE_DECLARATIONS:
                symbol = self._type_symbol(child, src, scope)
                if symbol is None:
                    continue
                yield symbol
                body = child.child_by_field_name("body")
                if body is not None:
                    yield from self._walk(body, src, scope + [symbol.name])
            elif child.type in _METHOD_DECLARATIONS:
                symbol = self._method_symbol(child, src, scope)
                if symbol is not None:
                    yield symbol
            elif child.type in _FIELD_DECLARATIONS:
                symbol = self._field_symbol(child, src, scope)
                if symbol is not None:
                    yield symbol
            elif child.type in _MEMBER_CONTAINERS:
                yield from self._walk(child, src, scope)

    # ------------------------------------------------------------------
    # Symbol builders

    def _type_symbol(
        self, node: Node, src: _Source, scope: List[str]
    ) -> Optional[DocumentedSymbol]:
        name = _field_text(node, "name", src)
        if not name:
            return None
        type_parameters = _type_parameter_names(node.child_by_field_name("type_parameters"), src)
        components: List[ParameterInfo] = []
        if node.type == "record_declaration":
            components = _formal_parameters(node.child_by_field_name("parameters"), src)
        symbol = self._base_symbol("class", name, node, src, scope)
        symbol.type_parameters = type_parameters
        symbol.parameters = [ParameterInfo(name=f"<{item}>") for item in type_parameters] + components
        symbol.signature = ClassSignature(
            type_parameters=tuple(type_parameters),
            components=tuple(component.name for component in components),
        )
        return symbol

    def _method_symbol(
        self, node: Node, src: _Source, scope: List[str]
    ) -> Optional[DocumentedSymbol]:
        name = _field_text(node, "name", src)
        if not name:
            return None
        type_parameters = _type_parameter_names(node.child_by_field_name("type_parameters"), src)
        parameters = _formal_parameters(node.child_by_field_name("parameters"), src)
        exceptions = _thrown_types(node, src)
        return_type: Optional[str] = None
        if node.type == "method_declaration":
            type_node = node.child_by_field_name("type")
            if type_node is not None and type_node.type != "void_type":
                return_type = src.node_text(type_node)

        symbol = self._base_symbol("method", name, node, src, scope)
        symbol.type_parameters = type_parameters
        symbol.parameters = [ParameterInfo(name=f"<{item}>") for item in type_parameters] + parameters
        symbol.return_type = return_type
        symbol.exceptions = exceptions
        symbol.signature = MethodSignature(
            parameters=tuple(parameter.name for parameter in parameters),
            type_parameters=tuple(type_parameters),
            exceptions=tuple(exceptions),
            has_return=return_type is not None,
        )
        return symbol

    def _field_symbol(
        self, node: Node, src: _Source, scope: List[str]
    ) -> Optional[DocumentedSymbol]:
        declarators = node.children_by_field_name("declarator")
        if not declarators:
            return None
        name = _field_text(declarators[0], "name", src)
        if not name:
            return None
        symbol = self._base_symbol("field", name, node, src, scope)
        type_node = node.child_by_field_name("type")
        type_name = src.node_text(type_node) if type_node is not None else ""
        symbol.parameters = [ParameterInfo(name=name, type_name=type_name, qualified_type_name=type_name)]
        symbol.signature = FieldSignature()
        return symbol

    def _base_symbol(
        self, kind: str, name: str, node: Node, src: _Source, scope: List[str]
    ) -> DocumentedSymbol:
        start = src.offset(node.start_byte)
        comment, span = _doc_comment(node, src)
        return DocumentedSymbol(
            kind=kind,
            name=name,
            qualified_name=".".join(scope + [name]),
            language=self.language,
            start=start,
            indent=_line_indent(src.text, start),
            text=src.node_text(node),
            comment=comment,
            comment_span=span,
        )


# ----------------------------------------------------------------------
# Node helpers


def _field_text(node: Node, field_name: str, src: _Source) -> str:
    child = node.child_by_field_name(field_name)
    return src.node_text(child) if child is not None else ""


def _type_parameter_names(node: Optional[Node], src: _Source) -> List[str]:
    if node is None:
        return []
    names: List[str] = []
    for parameter in node.named_children:
        if parameter.type != "type_parameter":
            continue
        for part in parameter.named_children:
            if part.type in {"type_identifier", "identifier"}:
                names.append(src.node_text(part))
                break
    return names


def _formal_parameters(node: Optional[Node], src: _Source) -> List[ParameterInfo]:
    if node is None:
        return []
    parameters: List[ParameterInfo] = []
    for parameter in node.named_children:
        if parameter.type == "formal_parameter":
            name = _field_text(parameter, "name", src)
            type_name = _field_text(parameter, "type", src)
        elif parameter.type == "spread_parameter":
            name, type_name = _spread_parameter(parameter, src)
        else:
            continue
        if name:
            parameters.append(
                ParameterInfo(
                    name=name,
                    type_name=_simple_type_name(type_name),
                    qualified_type_name=type_name,
                )
            )
    return parameters


def _spread_parameter(node: Node, src: _Source) -> Tuple[str, str]:
    name = ""
    type_name = ""
    for part in node.named_children:
        if part.type == "variable_declarator":
            name = _field_text(part, "name", src)
        elif part.type not in {"modifiers", "annotation", "marker_annotation"} and not type_name:
            type_name = f"{src.node_text(part)}..."
    return name, type_name


def _thrown_types(node: Node, src: _Source) -> List[str]:
    for child in node.named_children:
        if child.type == "throws":
            return [presentable_type_name(src.node_text(item)) for item in child.named_children]
    return []


def presentable_type_name(type_text: str) -> str:
    """``java.io.IOException`` -> ``IOException``; generic arguments dropped."""
    base = type_text.split("<", 1)[0].strip()
    return base.rsplit(".", 1)[-1]


def _simple_type_name(type_text: str) -> str:
    if "<" in type_text:
        head, _, tail = type_text.partition("<")
        return f"{presentable_type_name(head)}<{tail}"
    return presentable_type_name(type_text) if "." in type_text else type_text


def _doc_comment(node: Node, src: _Source) -> Tuple[Optional[str], Optional[Tuple[int, int]]]:
    previous = node.prev_sibling
    if previous is None or previous.type not in _COMMENT_NODES:
        return None, None
    text = src.node_text(previous)
    if not text.startswith("/**"):
        return None, None
    gap = src.data[previous.end_byte : node.start_byte]
    if gap.strip():
        return None, None
    return text, (src.offset(previous.start_byte), src.offset(previous.end_byte))


def _line_indent(text: str, offset: int) -> str:
    line_start = text.rfind("\n", 0, offset) + 1
    line = text[line_start:offset]
    if line.strip():
        full_line = text[line_start:]
        return full_line[: len(full_line) - len(full_line.lstrip(" \t"))]
    return line


__all__ = ["JAVA_LANGUAGE", "JavaSourceAnalyzer", "presentable_type_name"]
