"""
Pattern API Router

Endpoints:
- POST /v1/patterns/assign          - Assign patterns for an industry, sectors and location
- GET  /v1/patterns/assign          - Empirical patterns mined from canvases, for one industry
- GET  /v1/patterns/reconciliation  - Canvas industry/sector values missing from the catalog
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

from capopt_patterns.db.schema_mapping import split_codes
from capopt_patterns.dependencies import get_analysis_service, get_pattern_engine
from capopt_patterns.errors import ValidationError
from capopt_patterns.models.requests import PatternAssignmentRequest
from capopt_patterns.models.responses import (
    IndustryPatternReport,
    PatternAssignmentResult,
    ReconciliationReport,
)
from capopt_patterns.services.pattern_analysis import PatternAnalysisService
from capopt_patterns.services.pattern_engine import PatternEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/patterns", tags=["patterns"])


@router.post("/assign", response_model=PatternAssignmentResult)
async def assign_patterns(
    request: PatternAssignmentRequest,
    engine: PatternEngine = Depends(get_pattern_engine)
):
    """
    Assign facility types, operational streams, compliance requirements and
    regulatory frameworks.

    Requires an industry and at least one sector.
    """
    industry = (request.industry or "").strip()
    if not industry:
        raise ValidationError("industry", "Industry is required")

    sectors = split_codes(request.sectors)
    if not sectors:
        raise ValidationError("sectors", "At least one sector is required")

    logger.info(f"Pattern assignment requested for industry: {industry}, sectors: {', '.join(sectors)}")

    return engine.assign_patterns(
        industry,
        sectors,
        location=request.location,
        business_size=request.business_size,
        risk_profile=request.risk_profile,
    )


@router.get("/assign", response_model=IndustryPatternReport)
async def analyze_patterns(
    industry: Optional[str] = Query(None, description="Industry code"),
    sectors: Optional[str] = Query(None, description="Comma-separated sector codes"),
    location: Optional[str] = Query(None),
    service: PatternAnalysisService = Depends(get_analysis_service)
):
    """
    Patterns observed in existing canvases for one industry.
    """
    if not industry or not industry.strip():
        raise ValidationError("industry", "Industry parameter is required")

    logger.info(f"Pattern analysis requested for industry: {industry}")

    return service.industry_report(industry.strip(), split_codes(sectors), location)


@router.get("/reconciliation", response_model=ReconciliationReport)
async def reconcile_canvases(
    service: PatternAnalysisService = Depends(get_analysis_service)
):
    """
    Free-text drift report between canvases and the catalog. Nothing is written.
    """
    return service.reconcile_canvases()
