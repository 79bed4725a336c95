# Structural vocabulary shared by the import pipeline and the decomposition resolver
import enum
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Separator used when joining an ordered list of pinyin readings
PINYIN_SEPARATOR = ", "

# makemeahanzi writes this in place of a component it could not identify
UNKNOWN_COMPONENT = "？"


class StructureCategory(enum.Enum):
    """Broad layout families of Ideographic Description Characters"""

    HORIZONTAL = "horizontal"  # Components side by side
    VERTICAL = "vertical"  # Components stacked
    ENCLOSURE = "enclosure"  # One component surrounds another
    OVERLAY = "overlay"  # Components overlap
    TRANSFORM = "transform"  # Single component mirrored, rotated, subtracted


class StructureOperator(enum.Enum):
    """
    Ideographic Description Characters used in decomposition descriptors.

    Each operator has the following properties:
    - symbol: the character as it appears in the descriptor
    - category: the layout family it belongs to
    - arity: how many components it combines
    """

    LEFT_TO_RIGHT = ("⿰", StructureCategory.HORIZONTAL, 2)
    ABOVE_TO_BELOW = ("⿱", StructureCategory.VERTICAL, 2)
    LEFT_TO_MIDDLE_AND_RIGHT = ("⿲", StructureCategory.HORIZONTAL, 3)
    ABOVE_TO_MIDDLE_AND_BELOW = ("⿳", StructureCategory.VERTICAL, 3)
    FULL_SURROUND = ("⿴", StructureCategory.ENCLOSURE, 2)
    SURROUND_FROM_ABOVE = ("⿵", StructureCategory.ENCLOSURE, 2)
    SURROUND_FROM_BELOW = ("⿶", StructureCategory.ENCLOSURE, 2)
    SURROUND_FROM_LEFT = ("⿷", StructureCategory.ENCLOSURE, 2)
    SURROUND_FROM_UPPER_LEFT = ("⿸", StructureCategory.ENCLOSURE, 2)
    SURROUND_FROM_UPPER_RIGHT = ("⿹", StructureCategory.ENCLOSURE, 2)
    SURROUND_FROM_LOWER_LEFT = ("⿺", StructureCategory.ENCLOSURE, 2)
    OVERLAID = ("⿻", StructureCategory.OVERLAY, 2)
    # Unicode 15.1 additions
    SURROUND_FROM_RIGHT = ("⿼", StructureCategory.ENCLOSURE, 2)
    SURROUND_FROM_LOWER_RIGHT = ("⿽", StructureCategory.ENCLOSURE, 2)
    HORIZONTAL_REFLECTION = ("⿾", StructureCategory.TRANSFORM, 1)
    ROTATION = ("⿿", StructureCategory.TRANSFORM, 1)
    SUBTRACTION = ("㇯", StructureCategory.TRANSFORM, 2)

    def __new__(cls, symbol: str, category: StructureCategory, arity: int):
        obj = object.__new__(cls)
        obj._value_ = symbol
        obj.category = category
        obj.arity = arity
        return obj

    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["StructureOperator"]:
        """Return the operator for a descriptor character, or None for a glyph."""
        try:
            return cls(symbol)
        except ValueError:
            return None

    @classmethod
    def is_operator(cls, symbol: str) -> bool:
        return symbol in _OPERATOR_SYMBOLS


_OPERATOR_SYMBOLS = frozenset(op.value for op in StructureOperator)
