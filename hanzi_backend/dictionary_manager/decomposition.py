"""
Decomposition resolver: expands a stored IDS descriptor into the committed
records of its constituents.

Resolution is single level. A constituent that itself has a decomposition is
returned as-is; callers wanting to go deeper call `resolve_components` again
for that constituent.
"""

import logging
from typing import List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from hanzi_backend.dictionary_manager.db_helpers import get_character, get_characters
from hanzi_backend.dictionary_manager.enums import UNKNOWN_COMPONENT
from hanzi_backend.dictionary_manager.record_types import UnresolvedComponent
from hanzi_backend.dictionary_manager.text_helpers import parse_decomposition
from hanzi_backend.models import Character

logger = logging.getLogger(__name__)

ResolvedComponent = Union[Character, UnresolvedComponent]


def resolve_decomposition(session: Session, decomposition: Optional[str]) -> List[ResolvedComponent]:
    """
    Resolve every constituent glyph of a descriptor, in structural order.

    The result has exactly one item per constituent: the Character record, or
    an UnresolvedComponent when the glyph has no record. Repeated glyphs
    repeat their record. A None or empty descriptor gives an empty list.
    """
    components = parse_decomposition(decomposition)
    if not components:
        return []

    found = get_characters(session, (c for c in components if c != UNKNOWN_COMPONENT))

    resolved: List[ResolvedComponent] = []
    for component in components:
        record = found.get(component)
        resolved.append(record if record is not None else UnresolvedComponent(component))

    missing = sum(1 for item in resolved if isinstance(item, UnresolvedComponent))
    if missing:
        logger.debug(f"{missing} of {len(resolved)} components of {decomposition!r} unresolved")
    return resolved


def get_character_components(
    session: Session,
    character: str,
) -> Optional[Tuple[Character, List[ResolvedComponent]]]:
    """Look up `character` and resolve its stored decomposition, None if it has no record."""
    record = get_character(session, character)
    if record is None:
        return None
    return record, resolve_decomposition(session, record.decomposition)


def resolve_components(session: Session, character: str) -> Optional[List[ResolvedComponent]]:
    """
    Resolve the stored decomposition of `character`.

    Returns None when the character itself has no record, and an empty list
    when it has no decomposition.
    """
    result = get_character_components(session, character)
    return None if result is None else result[1]
