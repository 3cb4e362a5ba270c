"""
Framework catalog routes

- GET /v1/frameworks/industries                        - Active industries with active sectors
- GET /v1/frameworks/industries/{code}/{dimension}     - Resolved targets for one dimension
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

from capopt_patterns.db.repository import CatalogRepository
from capopt_patterns.db.schema_mapping import split_codes
from capopt_patterns.dependencies import get_repository, get_resolver
from capopt_patterns.errors import NotFoundError
from capopt_patterns.models.catalog import Dimension
from capopt_patterns.models.responses import DimensionResolutionResponse, IndustryListResponse
from capopt_patterns.services.association_resolver import AssociationResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/frameworks", tags=["frameworks"])

DIMENSION_SLUGS = {
    "facility-types": Dimension.FACILITY,
    "operational-streams": Dimension.OPERATIONAL,
    "compliance-requirements": Dimension.COMPLIANCE,
    "regulatory-frameworks": Dimension.REGULATORY,
}


@router.get("/industries", response_model=IndustryListResponse)
async def list_industries(repository: CatalogRepository = Depends(get_repository)):
    industries = [
        industry.model_copy(update={"sectors": industry.active_sectors()})
        for industry in repository.list_industries()
    ]
    return IndustryListResponse(industries=industries)


@router.get("/industries/{industry_code}/{dimension_slug}", response_model=DimensionResolutionResponse)
async def resolve_dimension(
    industry_code: str,
    dimension_slug: str,
    sectors: Optional[str] = Query(None, description="Comma-separated sector codes"),
    resolver: AssociationResolver = Depends(get_resolver)
):
    dimension = DIMENSION_SLUGS.get(dimension_slug)
    if dimension is None:
        raise NotFoundError("dimension", dimension_slug)

    resolution = resolver.resolve(industry_code, split_codes(sectors), dimension)
    logger.info(
        f"Resolved {len(resolution.targets)} {dimension.value} targets for "
        f"{industry_code} via {resolution.method.value}"
    )

    return DimensionResolutionResponse(
        industry=resolution.industry_code,
        dimension=dimension,
        method=resolution.method,
        requested_sectors=resolution.requested_sectors,
        matched_sectors=resolution.matched_sectors,
        ignored_sectors=resolution.ignored_sectors,
        targets=resolution.targets,
    )
