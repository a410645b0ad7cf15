"""Documentation comment reconciliation."""

from .assembler import assemble_comment
from .comparator import (
    CommentHost,
    DocCommentComparator,
    JavaDocCommentComparator,
    StaticCommentHost,
    build_comparator_registry,
    merge_texts,
)
from .description import choose_description
from .parser import ParsedComment, parse_comment
from .reconciler import MergedTags, reconcile

__all__ = [
    "CommentHost",
    "DocCommentComparator",
    "JavaDocCommentComparator",
    "MergedTags",
    "ParsedComment",
    "StaticCommentHost",
    "assemble_comment",
    "build_comparator_registry",
    "choose_description",
    "merge_texts",
    "parse_comment",
    "reconcile",
]
