"""Core domain models."""

from core.models.valuation import (
    Valuation,
    ValuationContact,
    ValuationProperty,
    ValuationEstimate,
    ValuationIndexEntry,
    ValuationStage,
)
from core.models.lead import Lead, LeadCreate, LeadIndexEntry
from core.models.blog_post import (
    BlogPost,
    BlogPostCreate,
    BlogPostUpdate,
    BlogCategory,
    BlogContent,
    BlogSection,
)

__all__ = [
    # Valuation
    "Valuation", "ValuationContact", "ValuationProperty", "ValuationEstimate",
    "ValuationIndexEntry", "ValuationStage",
    # Lead
    "Lead", "LeadCreate", "LeadIndexEntry",
    # BlogPost
    "BlogPost", "BlogPostCreate", "BlogPostUpdate", "BlogCategory",
    "BlogContent", "BlogSection",
]
