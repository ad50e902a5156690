"""
Document Quality Tiers

Which formatting blocks each quality tier includes, and which tier a
subscription plan is entitled to.

    Block                    basic   standard   enterprise
    cover_page                 -        x           x
    document_control           -        x           x
    enhanced_header_footer     -        x           x
    table_of_contents          -        -           x
    signature_block            -        -           x
    certification_badge        -        -           x (needs certificate #)
    custom_branding            -        -           x
    update_fields              -        -           x

Basic documents use the plain title-page shell instead of the cover page.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Optional

from shared.models import DocumentQuality


class DocumentBlock(str, Enum):
    COVER_PAGE = "cover_page"
    DOCUMENT_CONTROL = "document_control"
    ENHANCED_HEADER_FOOTER = "enhanced_header_footer"
    TABLE_OF_CONTENTS = "table_of_contents"
    SIGNATURE_BLOCK = "signature_block"
    CERTIFICATION_BADGE = "certification_badge"
    CUSTOM_BRANDING = "custom_branding"
    UPDATE_FIELDS = "update_fields"


_STANDARD_BLOCKS = frozenset({
    DocumentBlock.COVER_PAGE,
    DocumentBlock.DOCUMENT_CONTROL,
    DocumentBlock.ENHANCED_HEADER_FOOTER,
})

TIER_BLOCKS: Dict[DocumentQuality, FrozenSet[DocumentBlock]] = {
    DocumentQuality.BASIC: frozenset(),
    DocumentQuality.STANDARD: _STANDARD_BLOCKS,
    DocumentQuality.ENTERPRISE: _STANDARD_BLOCKS | {
        DocumentBlock.TABLE_OF_CONTENTS,
        DocumentBlock.SIGNATURE_BLOCK,
        DocumentBlock.CERTIFICATION_BADGE,
        DocumentBlock.CUSTOM_BRANDING,
        DocumentBlock.UPDATE_FIELDS,
    },
}


def includes(quality: Optional[DocumentQuality], block: DocumentBlock) -> bool:
    """Whether a tier includes a block. A missing quality is basic."""
    return block in TIER_BLOCKS[quality or DocumentQuality.BASIC]


# ============================================================================
# Subscription Plans
# ============================================================================

# Plan slugs match tier names; legacy slugs kept for existing subscriptions.
PLAN_TO_TIER: Dict[str, str] = {
    "free": "free",
    "starter": "starter",
    "professional": "professional",
    "business": "business",
    "enterprise": "enterprise",
    "growth": "professional",
    "scale": "business",
    "pro": "professional",
}

TIER_QUALITY: Dict[str, DocumentQuality] = {
    "free": DocumentQuality.BASIC,
    "starter": DocumentQuality.STANDARD,
    "professional": DocumentQuality.STANDARD,
    "business": DocumentQuality.ENTERPRISE,
    "enterprise": DocumentQuality.ENTERPRISE,
}


def tier_for_plan(plan: Optional[str]) -> str:
    """Subscription tier for a plan slug; unknown or missing plans are free."""
    return PLAN_TO_TIER.get((plan or "").lower(), "free")


def quality_for_plan(plan: Optional[str]) -> DocumentQuality:
    return TIER_QUALITY[tier_for_plan(plan)]
