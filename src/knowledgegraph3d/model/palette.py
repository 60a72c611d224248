"""Colors and display names for node categories and edge relation types."""
from __future__ import annotations

import logging

from knowledgegraph3d.model.graph import Category, RelationType

logger = logging.getLogger(__name__)

# Used only when a value outside the enums slips through (e.g. a raw string).
FALLBACK_COLOR = "#6b7280"

MASTERY_RING_COLOR = "#ffffff"
LABEL_COLOR = "#1f2937"
BACKGROUND_TOP_LEFT = "#eff6ff"
BACKGROUND_BOTTOM_RIGHT = "#ecfeff"

CATEGORY_DISPLAY_NAMES: dict[Category, str] = {
    Category.FOUNDATION: "Foundations",
    Category.CORE: "Core skills",
    Category.ADVANCED: "Advanced applications",
    Category.TECHNICAL: "Technical implementation",
    Category.AI: "AI",
}


def category_color(category: Category) -> str:
    match category:
        case Category.FOUNDATION:
            return "#3b82f6"
        case Category.CORE:
            return "#10b981"
        case Category.ADVANCED:
            return "#f59e0b"
        case Category.TECHNICAL:
            return "#8b5cf6"
        case Category.AI:
            return "#ef4444"
        case _:
            logger.warning(f"No color for category {category!r}, using fallback {FALLBACK_COLOR}.")
            return FALLBACK_COLOR


def relation_color(relation: RelationType) -> str:
    match relation:
        case RelationType.PREREQUISITE:
            return "#3b82f6"
        case RelationType.RELATED:
            return "#10b981"
        case RelationType.ADVANCED:
            return "#f59e0b"
        case _:
            logger.warning(f"No color for relation {relation!r}, using fallback {FALLBACK_COLOR}.")
            return FALLBACK_COLOR
