"""Blog post domain models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

SLUG_PATTERN = r"^[a-z0-9-]+$"


class BlogCategory(str, Enum):
    """Fixed set of categories offered by the content editor."""

    LEASES_AND_CONTRACTS = "Leases & Contracts"
    VALUATION = "Valuation"
    SALES_TIPS = "Sales Tips"
    TAX_AND_LEGAL = "Tax & Legal"
    MARKET_TRENDS = "Market Trends"


class BlogSection(BaseModel):
    heading: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)


class BlogContent(BaseModel):
    """Article body: intro, ordered sections, conclusion."""

    intro: str = ""
    sections: list[BlogSection] = Field(default_factory=list)
    conclusion: str = ""


class BlogPostCreate(BaseModel):
    """Data required to create a blog post."""

    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN)
    excerpt: str = Field(..., min_length=1, max_length=300)
    category: BlogCategory
    date: str | None = Field(None, max_length=50, description="Display date, e.g. 'January 5, 2025'")
    read_time: str | None = Field(None, max_length=50)
    featured: bool = False
    content: BlogContent = Field(default_factory=BlogContent)


class BlogPostUpdate(BaseModel):
    """Data that can be updated on a blog post. All fields optional."""

    title: str | None = Field(None, min_length=1, max_length=200)
    slug: str | None = Field(None, min_length=1, max_length=100, pattern=SLUG_PATTERN)
    excerpt: str | None = Field(None, min_length=1, max_length=300)
    category: BlogCategory | None = None
    date: str | None = Field(None, max_length=50)
    read_time: str | None = Field(None, max_length=50)
    featured: bool | None = None
    content: BlogContent | None = None


class BlogPost(BaseModel):
    """Full blog post entity as stored."""

    id: str
    slug: str
    title: str
    excerpt: str
    category: BlogCategory
    date: str
    read_time: str
    featured: bool = False
    content: BlogContent
    created_at: datetime
    updated_at: datetime
