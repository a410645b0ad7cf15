"""Core data models shared across easydoc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple, Union


@dataclass(frozen=True)
class SignatureSnapshot:
    """Current truth about a symbol, used to validate documentation tags.

    Generic type parameters appear in ``valid_param_keys`` wrapped as ``<T>``
    so they never collide with a value parameter called ``T``.
    """

    valid_param_keys: FrozenSet[str] = frozenset()
    valid_exception_keys: FrozenSet[str] = frozenset()
    has_return: bool = False


@dataclass(frozen=True)
class MethodSignature:
    """Methods and constructors."""

    parameters: Tuple[str, ...] = ()
    type_parameters: Tuple[str, ...] = ()
    exceptions: Tuple[str, ...] = ()
    has_return: bool = False


@dataclass(frozen=True)
class ClassSignature:
    """Classes, interfaces, enums and records (``components`` are record components)."""

    type_parameters: Tuple[str, ...] = ()
    components: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FieldSignature:
    """Fields carry nothing a tag could be validated against."""


Signature = Union[MethodSignature, ClassSignature, FieldSignature, SignatureSnapshot]


def _generic_keys(type_parameters: Tuple[str, ...]) -> FrozenSet[str]:
    return frozenset(f"<{name}>" for name in type_parameters)


def to_snapshot(signature: Signature | None) -> SignatureSnapshot:
    """Flatten a signature variant into the three fields reconciliation reads.

    ``None`` means the host had no data; it becomes the empty snapshot.
    """
    if signature is None:
        return SignatureSnapshot()
    if isinstance(signature, SignatureSnapshot):
        return signature
    if isinstance(signature, MethodSignature):
        return SignatureSnapshot(
            valid_param_keys=frozenset(signature.parameters)
            | _generic_keys(signature.type_parameters),
            valid_exception_keys=frozenset(signature.exceptions),
            has_return=signature.has_return,
        )
    if isinstance(signature, ClassSignature):
        return SignatureSnapshot(
            valid_param_keys=frozenset(signature.components)
            | _generic_keys(signature.type_parameters),
        )
    if isinstance(signature, FieldSignature):
        return SignatureSnapshot()
    raise TypeError(f"Unsupported signature variant: {type(signature).__name__}")


@dataclass
class ParameterInfo:
    """A parameter (or generic ``<T>``) as seen by comment templates."""

    name: str
    type_name: str = ""
    qualified_type_name: str = ""


@dataclass
class DocumentedSymbol:
    """A class, method or field located in a source file.

    ``start``, ``comment_span`` are character offsets into the source text the
    symbol was extracted from; ``indent`` is the whitespace preceding the
    declaration on its line.
    """

    kind: str
    name: str
    qualified_name: str
    language: str
    start: int
    indent: str
    text: str
    signature: Signature = field(default_factory=FieldSignature)
    comment: Optional[str] = None
    comment_span: Optional[Tuple[int, int]] = None
    parameters: List[ParameterInfo] = field(default_factory=list)
    type_parameters: List[str] = field(default_factory=list)
    return_type: Optional[str] = None
    exceptions: List[str] = field(default_factory=list)

    def existing_comment(self) -> Optional[str]:
        return self.comment

    def current_signature(self) -> Signature:
        return self.signature


__all__ = [
    "ClassSignature",
    "DocumentedSymbol",
    "FieldSignature",
    "MethodSignature",
    "ParameterInfo",
    "Signature",
    "SignatureSnapshot",
    "to_snapshot",
]
