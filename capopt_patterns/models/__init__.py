"""
Data models for the CapOpt pattern service
"""
from .catalog import (
    Association,
    Canvas,
    CatalogEntry,
    Dimension,
    DIMENSION_ORDER,
    Industry,
    Jurisdiction,
    ResolvedTarget,
    Sector,
    SectorCategory,
)
from .requests import PatternAssignmentRequest
from .responses import (
    AnalysisStatistics,
    ComplianceAssignment,
    DimensionResolutionResponse,
    ErrorResponse,
    IndustryListResponse,
    IndustryPatternReport,
    Pattern,
    PatternAnalysisResult,
    PatternAssignmentResult,
    PatternSummary,
    ReconciliationReport,
    ResolutionMethod,
    UnmatchedSector,
)

__all__ = [
    # Catalog
    "Association",
    "Canvas",
    "CatalogEntry",
    "Dimension",
    "DIMENSION_ORDER",
    "Industry",
    "Jurisdiction",
    "ResolvedTarget",
    "Sector",
    "SectorCategory",
    # Requests
    "PatternAssignmentRequest",
    # Responses
    "AnalysisStatistics",
    "ComplianceAssignment",
    "DimensionResolutionResponse",
    "ErrorResponse",
    "IndustryListResponse",
    "IndustryPatternReport",
    "Pattern",
    "PatternAnalysisResult",
    "PatternAssignmentResult",
    "PatternSummary",
    "ReconciliationReport",
    "ResolutionMethod",
    "UnmatchedSector",
]
