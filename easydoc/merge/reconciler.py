"""Three-way tag reconciliation between an old comment, a fresh one and the signature."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, List, Mapping, Optional

from ..models import SignatureSnapshot
from .parser import ParsedComment


@dataclass
class MergedTags:
    """Tag lines per category, already filtered and ordered for reassembly."""

    params: List[str] = field(default_factory=list)
    return_tag: Optional[str] = None
    exceptions: List[str] = field(default_factory=list)
    other: List[str] = field(default_factory=list)


def merge_validated(
    old: Mapping[str, str],
    new: Mapping[str, str],
    valid_keys: AbstractSet[str],
) -> List[str]:
    """Keep old entries still in ``valid_keys``, then append valid new-only entries.

    Old entries keep their relative order and text; a new entry is only used
    when the old comment never documented that key.
    """
    merged = [line for key, line in old.items() if key in valid_keys]
    merged.extend(
        line for key, line in new.items() if key not in old and key in valid_keys
    )
    return merged


def merge_single(old: Optional[str], new: Optional[str], keep: bool) -> Optional[str]:
    if not keep:
        return None
    return old if old is not None else new


def merge_unvalidated(old: Mapping[str, str], new: Mapping[str, str]) -> List[str]:
    """All old entries verbatim, plus new entries whose tag name is not taken yet."""
    merged = list(old.values())
    merged.extend(line for key, line in new.items() if key not in old)
    return merged


def reconcile(
    old: ParsedComment, new: ParsedComment, signature: SignatureSnapshot
) -> MergedTags:
    """Merge tag groups of ``old`` and ``new`` against the current ``signature``.

    Param, return and exception tags follow the signature (stale ones are
    dropped, missing ones appended). Every other tag is metadata and is never
    filtered by the signature.
    """
    return MergedTags(
        params=merge_validated(old.param_tags, new.param_tags, signature.valid_param_keys),
        return_tag=merge_single(old.return_tag, new.return_tag, signature.has_return),
        exceptions=merge_validated(
            old.exception_tags, new.exception_tags, signature.valid_exception_keys
        ),
        other=merge_unvalidated(old.other_tags, new.other_tags),
    )


__all__ = ["MergedTags", "merge_single", "merge_unvalidated", "merge_validated", "reconcile"]
