"""
Pydantic models for campaigns, creatives, products and performance data.

Enum values are the wire strings; human-readable labels live in separate
tables and are exposed through each enum's ``label`` property.

Every ratio metric is computed on read and returns 0 when its denominator
is zero or its counters are absent. Counters and amounts are finite and
non-negative, so every ratio is too.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


Number = Union[int, float, Decimal]


def safe_ratio(numerator: Optional[Number], denominator: Optional[Number], scale: float = 1.0) -> float:
    """
    numerator / denominator * scale.

    Returns 0.0 when either side is missing or non-finite, the numerator is
    negative, or the denominator is not positive.
    """
    if numerator is None or denominator is None:
        return 0.0
    numerator, denominator = float(numerator), float(denominator)
    if not (math.isfinite(numerator) and math.isfinite(denominator)):
        return 0.0
    if numerator < 0 or denominator <= 0:
        return 0.0
    return numerator / denominator * scale


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Enums
# ============================================================================

class CampaignStatus(str, Enum):
    """Lifecycle status of a campaign"""
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return CAMPAIGN_STATUS_LABELS[self]


class AdPlatform(str, Enum):
    """Advertising platforms a campaign can run on"""
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"

    @property
    def label(self) -> str:
        return AD_PLATFORM_LABELS[self]


class CampaignObjective(str, Enum):
    """What a campaign optimizes for"""
    AWARENESS = "awareness"
    TRAFFIC = "traffic"
    ENGAGEMENT = "engagement"
    SALES = "sales"
    LEADS = "leads"

    @property
    def label(self) -> str:
        return CAMPAIGN_OBJECTIVE_LABELS[self]


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    ALL = "all"

    @property
    def label(self) -> str:
        return self.value.title()


class CampaignFilter(str, Enum):
    """Status filter for campaign listings"""
    ALL = "all"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    DRAFT = "draft"

    def matches(self, status: CampaignStatus) -> bool:
        return self is CampaignFilter.ALL or self.value == CampaignStatus(status).value


class CreativeType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    CAROUSEL = "carousel"
    COLLECTION = "collection"

    @property
    def label(self) -> str:
        return self.value.title()


class CreativeFormat(str, Enum):
    SQUARE = "square"
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"
    STORY = "story"

    @property
    def label(self) -> str:
        return self.value.title()

    @property
    def aspect_ratio(self) -> str:
        """Aspect ratio string, e.g. "4:5"."""
        return CREATIVE_FORMAT_ASPECT_RATIOS[self]

    @property
    def dimensions(self) -> Tuple[int, int]:
        """Aspect ratio as a (width, height) pair."""
        width, height = self.aspect_ratio.split(":")
        return int(width), int(height)


class VisualStyle(str, Enum):
    MINIMAL = "minimal"
    BOLD = "bold"
    LIFESTYLE = "lifestyle"
    LUXURY = "luxury"
    PLAYFUL = "playful"
    CORPORATE = "corporate"

    @property
    def label(self) -> str:
        return VISUAL_STYLE_LABELS[self]


class ToneStyle(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    HUMOROUS = "humorous"
    SERIOUS = "serious"
    INSPIRATIONAL = "inspirational"
    DRAMATIC = "dramatic"

    @property
    def label(self) -> str:
        return self.value.title()


class HookStyle(str, Enum):
    PROBLEM = "problem"
    BENEFIT = "benefit"
    CURIOSITY = "curiosity"
    URGENCY = "urgency"
    SOCIAL = "social"

    @property
    def label(self) -> str:
        return HOOK_STYLE_LABELS[self]


# ============================================================================
# Display label tables
# ============================================================================

CAMPAIGN_STATUS_LABELS: Dict[CampaignStatus, str] = {
    CampaignStatus.DRAFT: "Draft",
    CampaignStatus.ACTIVE: "Active",
    CampaignStatus.PAUSED: "Paused",
    CampaignStatus.COMPLETED: "Completed",
}

AD_PLATFORM_LABELS: Dict[AdPlatform, str] = {
    AdPlatform.FACEBOOK: "Facebook",
    AdPlatform.TIKTOK: "TikTok",
}

CAMPAIGN_OBJECTIVE_LABELS: Dict[CampaignObjective, str] = {
    CampaignObjective.AWARENESS: "Brand Awareness",
    CampaignObjective.TRAFFIC: "Website Traffic",
    CampaignObjective.ENGAGEMENT: "Social Engagement",
    CampaignObjective.SALES: "Sales & Conversions",
    CampaignObjective.LEADS: "Lead Generation",
}

VISUAL_STYLE_LABELS: Dict[VisualStyle, str] = {
    VisualStyle.MINIMAL: "Minimal & Clean",
    VisualStyle.BOLD: "Bold & Dynamic",
    VisualStyle.LIFESTYLE: "Lifestyle & Natural",
    VisualStyle.LUXURY: "Luxury & Premium",
    VisualStyle.PLAYFUL: "Playful & Fun",
    VisualStyle.CORPORATE: "Corporate & Professional",
}

HOOK_STYLE_LABELS: Dict[HookStyle, str] = {
    HookStyle.PROBLEM: "Problem-Solution",
    HookStyle.BENEFIT: "Direct Benefit",
    HookStyle.CURIOSITY: "Curiosity",
    HookStyle.URGENCY: "Urgency",
    HookStyle.SOCIAL: "Social Proof",
}

CREATIVE_FORMAT_ASPECT_RATIOS: Dict[CreativeFormat, str] = {
    CreativeFormat.SQUARE: "1:1",
    CreativeFormat.PORTRAIT: "4:5",
    CreativeFormat.LANDSCAPE: "16:9",
    CreativeFormat.STORY: "9:16",
}


# ============================================================================
# Products
# ============================================================================

class ProductVariant(BaseModel):
    """Purchasable variant of a product"""
    id: UUID = Field(default_factory=uuid4)
    name: str
    sku: str
    price: float = Field(..., gt=0, allow_inf_nan=False)
    attributes: Dict[str, str] = Field(default_factory=dict)
    stock_level: int = Field(0, ge=0)


class Product(BaseModel):
    """Product being advertised"""
    id: UUID = Field(default_factory=uuid4)
    title: str
    description: str
    price: float = Field(..., gt=0, allow_inf_nan=False)
    type: str
    features: Optional[List[str]] = None
    images: Optional[List[str]] = None
    variants: Optional[List[ProductVariant]] = None
    metadata: Optional[Dict[str, str]] = None


# ============================================================================
# Audience, style and performance
# ============================================================================

class TargetAudience(BaseModel):
    """Who a campaign is shown to. Immutable once created; the string sets are tuples."""
    model_config = ConfigDict(frozen=True)

    age_min: int = Field(18, ge=13)
    age_max: int = Field(65, ge=13)
    locations: Tuple[str, ...] = ()
    interests: Tuple[str, ...] = ()
    gender: Optional[Gender] = None
    languages: Tuple[str, ...] = ()

    @model_validator(mode='after')
    def check_age_range(self) -> 'TargetAudience':
        if self.age_min > self.age_max:
            raise ValueError(f"age_min ({self.age_min}) must not exceed age_max ({self.age_max})")
        return self

    @property
    def age_range(self) -> range:
        """Inclusive age range."""
        return range(self.age_min, self.age_max + 1)


class CreativeStyle(BaseModel):
    """Style settings that shape generation prompts"""
    model_config = ConfigDict(frozen=True)

    visual_style: VisualStyle = VisualStyle.MINIMAL
    tone: ToneStyle = ToneStyle.PROFESSIONAL
    hook_style: HookStyle = HookStyle.BENEFIT
    custom_style: str = ""


class CampaignPerformance(BaseModel):
    """Point-in-time analytics snapshot for a campaign"""
    impressions: int = Field(0, ge=0)
    clicks: int = Field(0, ge=0)
    ctr: float = Field(0.0, ge=0, allow_inf_nan=False)
    spend: float = Field(0.0, ge=0, allow_inf_nan=False)
    conversions: int = Field(0, ge=0)
    revenue: float = Field(0.0, ge=0, allow_inf_nan=False)
    cost_per_click: float = Field(0.0, ge=0, allow_inf_nan=False)
    cost_per_conversion: float = Field(0.0, ge=0, allow_inf_nan=False)
    roas: float = Field(0.0, ge=0, allow_inf_nan=False)

    @classmethod
    def from_counts(
        cls,
        impressions: int,
        clicks: int,
        spend: float,
        conversions: int,
        revenue: float,
    ) -> "CampaignPerformance":
        """Build a snapshot whose ratio fields are derived from the raw counts."""
        return cls(
            impressions=impressions,
            clicks=clicks,
            ctr=safe_ratio(clicks, impressions, 100),
            spend=spend,
            conversions=conversions,
            revenue=revenue,
            cost_per_click=safe_ratio(spend, clicks),
            cost_per_conversion=safe_ratio(spend, conversions),
            roas=safe_ratio(revenue, spend),
        )


class CreativePerformance(BaseModel):
    """Raw delivery counters for a single creative"""
    impressions: int = Field(0, ge=0)
    clicks: int = Field(0, ge=0)
    ctr: float = Field(0.0, ge=0, allow_inf_nan=False)
    conversions: int = Field(0, ge=0)
    spend: float = Field(0.0, ge=0, allow_inf_nan=False)
    revenue: float = Field(0.0, ge=0, allow_inf_nan=False)
    engagements: int = Field(0, ge=0)


class PerformanceDataPoint(BaseModel):
    """One day of performance counters"""
    id: UUID = Field(default_factory=uuid4)
    date: date
    spend: float = Field(..., ge=0, allow_inf_nan=False)
    revenue: float = Field(..., ge=0, allow_inf_nan=False)
    impressions: int = Field(..., ge=0)
    clicks: int = Field(..., ge=0)
    engagements: int = Field(0, ge=0)
    conversions: int = Field(0, ge=0)

    @property
    def roas(self) -> float:
        return safe_ratio(self.revenue, self.spend)

    @property
    def ctr(self) -> float:
        return safe_ratio(self.clicks, self.impressions, 100)

    @property
    def engagement_rate(self) -> float:
        return safe_ratio(self.engagements, self.impressions, 100)

    @property
    def conversion_rate(self) -> float:
        return safe_ratio(self.conversions, self.clicks, 100)


class AdHistoryEntry(BaseModel):
    """Past ad run for a product"""
    id: UUID = Field(default_factory=uuid4)
    campaign_id: UUID
    platform: AdPlatform
    start_date: date
    end_date: Optional[date] = None
    spend: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    impressions: int = Field(0, ge=0)
    clicks: int = Field(0, ge=0)
    conversions: int = Field(0, ge=0)
    revenue: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)

    @property
    def roas(self) -> float:
        return safe_ratio(self.revenue, self.spend)

    @property
    def ctr(self) -> float:
        return safe_ratio(self.clicks, self.impressions, 100)


# ============================================================================
# Creatives and campaigns
# ============================================================================

class Creative(BaseModel):
    """A produced ad unit (media + copy)"""
    id: UUID = Field(default_factory=uuid4)
    product_id: UUID
    type: CreativeType
    format: CreativeFormat
    media_url: str = ""  # set after the media is uploaded
    headline: str
    description: str
    call_to_action: str
    performance: Optional[CreativePerformance] = None

    @property
    def ctr(self) -> float:
        if self.performance is None:
            return 0.0
        return safe_ratio(self.performance.clicks, self.performance.impressions, 100)

    @property
    def engagement_rate(self) -> float:
        if self.performance is None:
            return 0.0
        return safe_ratio(self.performance.engagements, self.performance.impressions, 100)

    @property
    def conversion_rate(self) -> float:
        if self.performance is None:
            return 0.0
        return safe_ratio(self.performance.conversions, self.performance.clicks, 100)


class Campaign(BaseModel):
    """Advertising campaign. Field assignments are re-validated."""
    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    name: str
    objective: CampaignObjective
    platform: AdPlatform
    budget: float = Field(..., gt=0, allow_inf_nan=False)
    start_date: date
    end_date: date
    status: CampaignStatus = CampaignStatus.DRAFT
    creatives: List[Creative] = Field(default_factory=list)
    performance: Optional[CampaignPerformance] = None
    target_audience: TargetAudience = Field(default_factory=TargetAudience)
    roas: float = Field(0.0, ge=0, allow_inf_nan=False)
    impressions: int = Field(0, ge=0)
    ctr: float = Field(0.0, ge=0, allow_inf_nan=False)
    spend: float = Field(0.0, ge=0, allow_inf_nan=False)
    created_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode='after')
    def check_dates(self) -> 'Campaign':
        if self.end_date < self.start_date:
            raise ValueError(f"end_date ({self.end_date}) is before start_date ({self.start_date})")
        return self


# ============================================================================
# Generation results (transient)
# ============================================================================

class AdCopy(BaseModel):
    """Structured ad copy parsed from a generation response"""
    headline: str = ""
    description: str = ""
    call_to_action: str = ""
    keywords: List[str] = Field(default_factory=list)


@dataclass(frozen=True)
class MediaGeneration:
    """Generated media bytes with their creative type and format"""
    data: bytes
    type: CreativeType = CreativeType.IMAGE
    format: CreativeFormat = CreativeFormat.SQUARE
