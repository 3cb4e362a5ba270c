"""
Pattern Analysis Service
Mines existing business canvases for (industry, sector, dimension, value)
combinations that actually co-occur. Used to validate and calibrate the
curated associations, not to drive assignment.

Canvas industry and sector fields are free text. Codes are normalised
(upper case, spaces and hyphens to underscores) before counting, and
reconcile_canvases() reports values that do not line up with the catalog.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple
import logging
import re

from capopt_patterns.db.repository import CatalogRepository
from capopt_patterns.models.catalog import DIMENSION_ORDER, Canvas, Dimension
from capopt_patterns.models.responses import (
    AnalysisStatistics,
    IndustryPatternReport,
    Pattern,
    PatternAnalysisResult,
    PatternSummary,
    ReconciliationReport,
    UnmatchedSector,
)

logger = logging.getLogger(__name__)

PatternKey = Tuple[str, Optional[str], Dimension, str]

_SEPARATORS = re.compile(r"[\s\-]+")
_REPEATED_UNDERSCORES = re.compile(r"_+")


def normalize_code(value: Optional[str]) -> Optional[str]:
    """
    Normalise a free-text code.

    Example:
        >>> normalize_code(" mining-metals ")
        'MINING_METALS'
        >>> normalize_code("Iron Ore")
        'IRON_ORE'
    """
    if value is None:
        return None
    code = _SEPARATORS.sub("_", str(value).strip()).upper()
    code = _REPEATED_UNDERSCORES.sub("_", code).strip("_")
    return code or None


def _unique_codes(values: Iterable[str]) -> List[str]:
    return sorted({c for c in (normalize_code(v) for v in values) if c})


def pattern_sort_key(pattern: Pattern):
    return (
        pattern.industry_code,
        pattern.sector_code or "",
        DIMENSION_ORDER.index(pattern.dimension),
        pattern.value,
    )


class PatternAnalysisService:
    """Read-only canvas mining over a catalog repository"""

    def __init__(self, repository: CatalogRepository):
        self.repository = repository

    def analyze_existing_canvases(self) -> PatternAnalysisResult:
        """Mine patterns for all four dimensions."""
        logger.info("Starting pattern analysis of existing business canvases")
        result = self._mine(DIMENSION_ORDER)
        logger.info(
            f"Generated {result.statistics.patterns_generated} patterns from "
            f"{result.statistics.canvases_analyzed} canvases, average confidence: "
            f"{result.statistics.average_confidence:.2f}"
        )
        return result

    def generate_facility_patterns(self) -> List[Pattern]:
        """Mine patterns for the facility dimension only."""
        patterns = self._mine([Dimension.FACILITY]).patterns
        logger.info(f"Generated {len(patterns)} facility patterns")
        return patterns

    def industry_report(
        self,
        industry: str,
        sectors: Optional[List[str]] = None,
        location: Optional[str] = None
    ) -> IndustryPatternReport:
        """Analysis narrowed to one industry (GET /v1/patterns/assign)."""
        industry_code = normalize_code(industry) or industry
        analysis = self.analyze_existing_canvases()
        industry_patterns = [p for p in analysis.patterns if p.industry_code == industry_code]
        facility_patterns = [
            p for p in self.generate_facility_patterns() if p.industry_code == industry_code
        ]

        return IndustryPatternReport(
            industry=industry,
            sectors=sectors or [],
            location=location,
            patterns=PatternSummary(
                total=analysis.statistics.patterns_generated,
                industry_specific=len(industry_patterns),
                facility_patterns=len(facility_patterns),
                average_confidence=analysis.statistics.average_confidence,
            ),
            pattern_details={
                dimension: [p for p in industry_patterns if p.dimension == dimension]
                for dimension in DIMENSION_ORDER
            },
            statistics=analysis.statistics,
        )

    def reconcile_canvases(self) -> ReconciliationReport:
        """Report canvas industry/sector values that are not in the catalog."""
        catalog = {
            industry.code: {s.code for s in industry.active_sectors()}
            for industry in self.repository.list_industries()
        }
        canvases = self.repository.find_all_canvases()
        report = ReconciliationReport(total_canvases=len(canvases))

        for canvas in canvases:
            industry_code = normalize_code(canvas.industry)
            if not industry_code:
                report.missing_industry.append(canvas.id)
                continue
            if industry_code not in catalog:
                report.unknown_industries.setdefault(industry_code, []).append(canvas.id)
                continue
            for sector in _unique_codes(canvas.sectors):
                if sector not in catalog[industry_code]:
                    report.unmatched_sectors.append(UnmatchedSector(
                        canvas_id=canvas.id,
                        industry=industry_code,
                        sector=sector,
                    ))

        if report.unknown_industries or report.unmatched_sectors or report.missing_industry:
            logger.warning(
                f"Canvas drift: {len(report.unknown_industries)} unknown industries, "
                f"{len(report.unmatched_sectors)} unmatched sectors, "
                f"{len(report.missing_industry)} canvases without industry"
            )
        return report

    def _mine(self, dimensions: List[Dimension]) -> PatternAnalysisResult:
        canvases = self.repository.find_all_canvases()
        counts: Dict[PatternKey, int] = defaultdict(int)
        industry_totals: Dict[str, int] = defaultdict(int)

        for canvas in canvases:
            self._count_canvas(canvas, dimensions, counts, industry_totals)

        patterns = [
            Pattern(
                industry_code=industry,
                sector_code=sector,
                dimension=dimension,
                value=value,
                occurrence_count=count,
                confidence=round(min(count / industry_totals[industry], 1.0), 4),
            )
            for (industry, sector, dimension, value), count in counts.items()
        ]
        patterns.sort(key=pattern_sort_key)

        average = sum(p.confidence for p in patterns) / len(patterns) if patterns else 0.0
        by_dimension = {d: 0 for d in dimensions}
        for p in patterns:
            by_dimension[p.dimension] += 1

        return PatternAnalysisResult(
            patterns=patterns,
            statistics=AnalysisStatistics(
                total_canvases=len(canvases),
                canvases_analyzed=sum(industry_totals.values()),
                patterns_generated=len(patterns),
                average_confidence=round(average, 4),
                industries=len(industry_totals),
                by_dimension=by_dimension,
            ),
        )

    @staticmethod
    def _count_canvas(
        canvas: Canvas,
        dimensions: List[Dimension],
        counts: Dict[PatternKey, int],
        industry_totals: Dict[str, int]
    ):
        industry = normalize_code(canvas.industry)
        if not industry:
            return
        industry_totals[industry] += 1

        sectors: List[Optional[str]] = _unique_codes(canvas.sectors) or [None]
        for dimension in dimensions:
            # A value repeated inside one canvas counts once
            for value in _unique_codes(canvas.values_for(dimension)):
                for sector in sectors:
                    counts[(industry, sector, dimension, value)] += 1
