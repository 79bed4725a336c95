"""
Character model: one row per glyph in the knowledge base.
"""

from typing import Any, Dict

from sqlalchemy import Boolean, Column, Index, Integer, SmallInteger, Text, UniqueConstraint

from hanzi_backend.database import Base


class Character(Base):
    """Model for a character and its merged dictionary/reference metadata."""
    __tablename__ = 'characters'

    # Surrogate key, regenerated by every import
    id = Column(Integer, primary_key=True, autoincrement=True)
    character = Column(Text, nullable=False)
    definition = Column(Text, nullable=False, default='')
    pinyin = Column(Text, nullable=False, default='')
    radical = Column(Text, nullable=True)
    hsk_level = Column(SmallInteger, nullable=True)
    is_radical = Column(Boolean, nullable=False, default=False)
    script_type = Column(Text, nullable=True)
    stroke_count = Column(Integer, nullable=True)
    decomposition = Column(Text, nullable=True)
    variants = Column(Text, nullable=True)
    radical_variants = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint('character', name='characters_character_uniq'),
        Index('idx_characters_radical', 'radical'),
        Index('idx_characters_hsk_level', 'hsk_level'),
    )

    def __repr__(self) -> str:
        return f"<Character {self.character} ({self.id})>"

    def to_dict(self) -> Dict[str, Any]:
        """Convert character to dictionary."""
        return {
            'id': self.id,
            'character': self.character,
            'definition': self.definition,
            'pinyin': self.pinyin,
            'radical': self.radical,
            'hsk_level': self.hsk_level,
            'is_radical': bool(self.is_radical),
            'script_type': self.script_type,
            'stroke_count': self.stroke_count,
            'decomposition': self.decomposition,
            'variants': self.variants,
            'radical_variants': self.radical_variants,
        }
