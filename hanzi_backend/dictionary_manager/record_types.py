from dataclasses import dataclass
from typing import Any, Dict, Optional, TypedDict


@dataclass(frozen=True)
class ReferenceEntry:
    """Level and structure metadata for one character from the reference table."""
    level: Optional[int] = None
    script: Optional[str] = None
    strokes: Optional[int] = None
    decomp: Optional[str] = None
    variant: Optional[str] = None


@dataclass(frozen=True)
class DictionaryEntry:
    """One validated line of the dictionary source, fields still loosely typed."""
    character: str
    definition: Any = None
    pinyin: Any = None
    radical: Any = None
    hsk: Any = None
    variants: Any = None
    radical_variants: Any = None


class EnrichedRecord(TypedDict):
    character: str
    definition: Any
    pinyin: Any
    radical: Any
    radical_variants: Any
    hsk_level: Optional[int]
    script_type: Optional[str]
    stroke_count: Optional[int]
    decomposition: Optional[str]
    variants: Optional[str]


class CharacterRow(TypedDict):
    character: str
    definition: str
    pinyin: str
    radical: Optional[str]
    hsk_level: Optional[int]
    is_radical: bool
    script_type: Optional[str]
    stroke_count: Optional[int]
    decomposition: Optional[str]
    variants: Optional[str]
    radical_variants: Optional[str]


@dataclass(frozen=True)
class UnresolvedComponent:
    """Placeholder for a decomposition constituent with no committed record."""
    character: str

    def to_dict(self) -> Dict[str, Any]:
        return {'character': self.character, 'resolved': False}
