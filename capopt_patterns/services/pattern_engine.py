"""
Pattern Engine
Assigns facility types, operational streams, compliance requirements and
regulatory frameworks to a business from its industry, sectors and location.

Confidence reflects how much curated, sector-specific data backed the
assignment:
- SECTOR dimensions score 0.5 + 0.5 * (matched sectors / requested sectors)
- FALLBACK (industry-level) dimensions score 0.25
- dimensions with no associations at all are left out of the mean

Every requested sector matched in every dimension gives 1.0; each dimension
that falls back lowers the mean.

Monotonicity is measured over dimensions that have data: turning a SECTOR
dimension into a FALLBACK one never raises confidence. EMPTY dimensions are
outside that axis since there is nothing to fall back to. An assignment with
no data at all scores 0.0, so an industry that gains its first
industry-level association moves from 0.0 to 0.25.
"""
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional
import logging

from capopt_patterns.db.repository import CatalogRepository
from capopt_patterns.models.catalog import DIMENSION_ORDER, Dimension, ResolvedTarget
from capopt_patterns.models.responses import (
    ComplianceAssignment,
    PatternAssignmentResult,
    ResolutionMethod,
)
from capopt_patterns.services.association_resolver import (
    AssociationResolver,
    Resolution,
    normalize_sector_codes,
    resolve_dimensions,
)
from capopt_patterns.services.location_rules import extract_state, filter_by_state

logger = logging.getLogger(__name__)

ASSIGNMENT_METHOD = "pattern_engine"

SECTOR_BASE_SCORE = 0.5
FALLBACK_SCORE = 0.25

# Dimensions narrowed by the location's state
STATE_SCOPED_DIMENSIONS = (Dimension.COMPLIANCE, Dimension.REGULATORY)


# =============================================================================
# CONFIDENCE
# =============================================================================

def dimension_score(resolution: Resolution) -> Optional[float]:
    """Score one dimension; None when the dimension had nothing to resolve."""
    if resolution.method == ResolutionMethod.EMPTY:
        return None
    if resolution.method == ResolutionMethod.SECTOR:
        requested = len(resolution.requested_sectors) or 1
        coverage = min(len(resolution.matched_sectors) / requested, 1.0)
        return SECTOR_BASE_SCORE + (1.0 - SECTOR_BASE_SCORE) * coverage
    return FALLBACK_SCORE


def calculate_confidence(resolutions: Iterable[Resolution]) -> float:
    """Mean dimension score in [0, 1], rounded to 4 decimals."""
    scores = [s for s in (dimension_score(r) for r in resolutions) if s is not None]
    if not scores:
        return 0.0
    return round(sum(scores) / len(scores), 4)


# =============================================================================
# AUDIT TRAIL
# =============================================================================

def build_applied_patterns(
    industry_code: str,
    resolutions: Iterable[Resolution],
    state: Optional[str] = None,
    business_size: Optional[str] = None,
    risk_profile: Optional[str] = None
) -> List[str]:
    """Ordered, de-duplicated list of the rule paths that fired"""
    applied: List[str] = []

    def add(entry: str):
        if entry not in applied:
            applied.append(entry)

    for resolution in resolutions:
        if resolution.method == ResolutionMethod.SECTOR:
            for sector in resolution.matched_sectors:
                add(f"industry-sector:{industry_code}/{sector}")
        elif resolution.method == ResolutionMethod.FALLBACK:
            add(f"industry-fallback:{industry_code}")
        elif resolution.method == ResolutionMethod.INDUSTRY:
            add(f"industry:{industry_code}")

    if state:
        add(f"location:{state}")
    if business_size:
        add(f"business-size:{business_size}")
    if risk_profile:
        add(f"risk-profile:{risk_profile}")

    return applied


def _union_codes(*groups: List[ResolvedTarget]) -> List[str]:
    codes: List[str] = []
    for group in groups:
        for target in group:
            if target.code not in codes:
                codes.append(target.code)
    return codes


# =============================================================================
# ENGINE
# =============================================================================

class PatternEngine:
    """
    Stateless pattern assignment over a catalog repository.

    The clock is injectable so identical inputs produce identical results,
    timestamp included.
    """

    def __init__(
        self,
        repository: CatalogRepository,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.resolver = AssociationResolver(repository)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def assign_patterns(
        self,
        industry: str,
        sectors: Iterable[str],
        location: Optional[str] = None,
        business_size: Optional[str] = None,
        risk_profile: Optional[str] = None
    ) -> PatternAssignmentResult:
        """
        Assign patterns across all four dimensions

        Args:
            industry: Industry code
            sectors: Sector codes (at least one is expected; enforced at the HTTP boundary)
            location: Free-text location; a recognised state narrows STATE-jurisdiction entries
            business_size: Recorded in the audit trail
            risk_profile: Recorded in the audit trail

        Raises:
            NotFoundError: unknown industry code
        """
        sector_codes = normalize_sector_codes(sectors)
        logger.info(f"Assigning patterns for industry: {industry}, sectors: {', '.join(sector_codes)}")

        resolutions = resolve_dimensions(self.resolver, industry, sector_codes, DIMENSION_ORDER)
        state = extract_state(location)
        details = self._apply_location(resolutions, state)

        compliance = self.assign_compliance_requirements(industry, sector_codes, location)

        result = PatternAssignmentResult(
            facility_types=_union_codes(details[Dimension.FACILITY]),
            operational_streams=_union_codes(details[Dimension.OPERATIONAL]),
            compliance_requirements=_union_codes(
                details[Dimension.COMPLIANCE], compliance.compliance_requirements
            ),
            regulatory_frameworks=_union_codes(
                details[Dimension.REGULATORY], compliance.regulatory_frameworks
            ),
            details=details,
            dimension_methods={d: r.method for d, r in resolutions.items()},
            confidence=calculate_confidence(resolutions.values()),
            applied_patterns=build_applied_patterns(
                industry,
                resolutions.values(),
                state=state,
                business_size=business_size,
                risk_profile=risk_profile,
            ),
            assignment_method=ASSIGNMENT_METHOD,
            context={
                "location": location,
                "state": state,
                "businessSize": business_size,
                "riskProfile": risk_profile,
            },
            timestamp=self.clock().isoformat(),
        )

        logger.info(f"Assigned patterns with confidence: {result.confidence:.2f}")
        logger.debug(
            f"  facility={len(result.facility_types)} "
            f"operational={len(result.operational_streams)} "
            f"compliance={len(result.compliance_requirements)} "
            f"regulatory={len(result.regulatory_frameworks)}"
        )
        return result

    def assign_facility_types(self, industry: str, sectors: Iterable[str]) -> List[ResolvedTarget]:
        """Facility types for an industry and its sectors."""
        return self.resolver.resolve(industry, sectors, Dimension.FACILITY).targets

    def assign_operational_streams(self, industry: str, sectors: Iterable[str]) -> List[ResolvedTarget]:
        """Operational streams for an industry and its sectors."""
        return self.resolver.resolve(industry, sectors, Dimension.OPERATIONAL).targets

    def assign_compliance_requirements(
        self,
        industry: str,
        sectors: Iterable[str],
        location: Optional[str] = None
    ) -> ComplianceAssignment:
        """
        Compliance requirements and regulatory frameworks, resolved independently.

        A state found in location keeps only that state's STATE-jurisdiction entries.
        """
        resolutions = resolve_dimensions(
            self.resolver, industry, sectors, STATE_SCOPED_DIMENSIONS
        )
        state = extract_state(location)
        return ComplianceAssignment(
            compliance_requirements=filter_by_state(resolutions[Dimension.COMPLIANCE].targets, state),
            regulatory_frameworks=filter_by_state(resolutions[Dimension.REGULATORY].targets, state),
        )

    def _apply_location(
        self,
        resolutions: Dict[Dimension, Resolution],
        state: Optional[str]
    ) -> Dict[Dimension, List[ResolvedTarget]]:
        details = {}
        for dimension, resolution in resolutions.items():
            targets = resolution.targets
            if dimension in STATE_SCOPED_DIMENSIONS:
                targets = filter_by_state(targets, state)
            details[dimension] = targets
        return details
