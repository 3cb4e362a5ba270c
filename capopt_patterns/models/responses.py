"""
Response models for the pattern service API
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from capopt_patterns.models.catalog import (
    CamelModel,
    Dimension,
    Industry,
    ResolvedTarget,
)


class ResolutionMethod(str, Enum):
    """Which resolver path produced a dimension's targets"""
    SECTOR = "sector"
    FALLBACK = "fallback"
    INDUSTRY = "industry"
    EMPTY = "empty"


class ComplianceAssignment(CamelModel):
    """Compliance requirements and regulatory frameworks, resolved independently"""

    compliance_requirements: List[ResolvedTarget] = Field(default_factory=list)
    regulatory_frameworks: List[ResolvedTarget] = Field(default_factory=list)


class PatternAssignmentResult(CamelModel):
    """Unified assignment across all four dimensions"""

    facility_types: List[str] = Field(default_factory=list)
    operational_streams: List[str] = Field(default_factory=list)
    compliance_requirements: List[str] = Field(default_factory=list)
    regulatory_frameworks: List[str] = Field(default_factory=list)
    details: Dict[Dimension, List[ResolvedTarget]] = Field(default_factory=dict)
    dimension_methods: Dict[Dimension, ResolutionMethod] = Field(default_factory=dict)
    confidence: float = Field(..., ge=0.0, le=1.0)
    applied_patterns: List[str] = Field(default_factory=list)
    assignment_method: str = "pattern_engine"
    context: Dict[str, Optional[str]] = Field(default_factory=dict)
    timestamp: str

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "facilityTypes": ["OPEN_PIT_MINE", "CRUSHING_PLANT"],
            "operationalStreams": ["MINING_OPERATIONS"],
            "complianceRequirements": ["WHS_ACT_2011"],
            "regulatoryFrameworks": ["ISO_45001"],
            "confidence": 0.875,
            "appliedPatterns": ["industry-sector:MINING_METALS/COAL"],
            "assignmentMethod": "pattern_engine",
            "timestamp": "2026-01-21T12:00:00+00:00",
        }
    })


class Pattern(CamelModel):
    """Empirically observed (industry, sector, dimension, value) combination"""

    industry_code: str
    sector_code: Optional[str] = None
    dimension: Dimension
    value: str
    occurrence_count: int = Field(..., ge=1)
    confidence: float = Field(..., ge=0.0, le=1.0)


class AnalysisStatistics(CamelModel):
    total_canvases: int = 0
    canvases_analyzed: int = 0
    patterns_generated: int = 0
    average_confidence: float = 0.0
    industries: int = 0
    by_dimension: Dict[Dimension, int] = Field(default_factory=dict)


class PatternAnalysisResult(CamelModel):
    patterns: List[Pattern] = Field(default_factory=list)
    statistics: AnalysisStatistics = Field(default_factory=AnalysisStatistics)


class PatternSummary(CamelModel):
    total: int
    industry_specific: int
    facility_patterns: int
    average_confidence: float


class IndustryPatternReport(CamelModel):
    """GET /v1/patterns/assign response: analysis filtered to one industry"""

    industry: str
    sectors: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    patterns: PatternSummary
    pattern_details: Dict[Dimension, List[Pattern]] = Field(default_factory=dict)
    statistics: AnalysisStatistics


class UnmatchedSector(CamelModel):
    canvas_id: str
    industry: str
    sector: str


class ReconciliationReport(CamelModel):
    """Free-text canvas codes that do not line up with the catalog"""

    total_canvases: int = 0
    unknown_industries: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Industry code -> canvas ids using it"
    )
    unmatched_sectors: List[UnmatchedSector] = Field(default_factory=list)
    missing_industry: List[str] = Field(
        default_factory=list,
        description="Canvas ids with no industry recorded"
    )


class IndustryListResponse(CamelModel):
    success: bool = True
    industries: List[Industry] = Field(default_factory=list)


class DimensionResolutionResponse(CamelModel):
    industry: str
    dimension: Dimension
    method: ResolutionMethod
    requested_sectors: List[str] = Field(default_factory=list)
    matched_sectors: List[str] = Field(default_factory=list)
    ignored_sectors: List[str] = Field(default_factory=list)
    targets: List[ResolvedTarget] = Field(default_factory=list)


class ErrorResponse(CamelModel):
    error: bool = True
    code: str
    message: str
    status_code: int
    details: Optional[Dict[str, Any]] = None
