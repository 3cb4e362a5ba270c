"""
Association Resolver
Looks up the catalog entries that apply to an industry and a set of sectors
for one dimension (facility types, operational streams, compliance
requirements or regulatory frameworks).

Resolution rules:
1. Sector-scoped associations take priority when sectors are supplied
2. When no sector-scoped association survives, fall back to every active,
   applicable association for the industry regardless of sector
3. Association overrides (name, description, risk profile) replace catalog
   defaults
4. Results are ordered by (sort_order, name) and deduplicated by code,
   keeping the lowest sort_order
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from capopt_patterns.db.query import AssociationQuery
from capopt_patterns.db.repository import CatalogRepository
from capopt_patterns.errors import NotFoundError
from capopt_patterns.models.catalog import (
    Association,
    Dimension,
    Industry,
    ResolvedTarget,
)
from capopt_patterns.models.responses import ResolutionMethod

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """Outcome of resolving one dimension"""

    dimension: Dimension
    industry_code: str
    method: ResolutionMethod
    targets: List[ResolvedTarget] = field(default_factory=list)
    requested_sectors: List[str] = field(default_factory=list)
    matched_sectors: List[str] = field(default_factory=list)
    ignored_sectors: List[str] = field(default_factory=list)

    @property
    def codes(self) -> List[str]:
        return [t.code for t in self.targets]

    @property
    def used_fallback(self) -> bool:
        return self.method == ResolutionMethod.FALLBACK


def normalize_sector_codes(sector_codes: Optional[Iterable[str]]) -> List[str]:
    """Strip blanks and duplicates, preserving request order."""
    seen = []
    for code in sector_codes or []:
        if code is None:
            continue
        code = str(code).strip()
        if code and code not in seen:
            seen.append(code)
    return seen


def sort_and_deduplicate(targets: List[ResolvedTarget]) -> List[ResolvedTarget]:
    """Order by (sort_order, name) and keep the first occurrence of each code."""
    ordered = sorted(targets, key=lambda t: (t.sort_order, t.name))
    seen = set()
    unique = []
    for target in ordered:
        if target.code in seen:
            continue
        seen.add(target.code)
        unique.append(target)
    return unique


class AssociationResolver:
    """Resolves industry/sector associations against a catalog repository"""

    def __init__(self, repository: CatalogRepository):
        self.repository = repository

    def get_industry(self, industry_code: str) -> Industry:
        industry = self.repository.find_industry_by_code(industry_code)
        if industry is None:
            logger.warning(f"Industry not found: {industry_code}")
            raise NotFoundError("industry", industry_code)
        return industry

    def resolve(
        self,
        industry_code: str,
        sector_codes: Optional[Iterable[str]],
        dimension: Dimension,
        industry: Optional[Industry] = None
    ) -> Resolution:
        """
        Resolve applicable targets for one dimension

        Args:
            industry_code: Industry code (must exist and be active)
            sector_codes: Requested sector codes; codes outside the industry are ignored
            dimension: Target dimension
            industry: Already-resolved industry, to skip the lookup

        Returns:
            Resolution (never None; targets may be empty)

        Raises:
            NotFoundError: unknown industry code
        """
        if industry is None:
            industry = self.get_industry(industry_code)

        requested = normalize_sector_codes(sector_codes)
        sector_ids_by_code = {s.code: s.id for s in industry.active_sectors()}
        known = [code for code in requested if code in sector_ids_by_code]
        ignored = [code for code in requested if code not in sector_ids_by_code]

        if ignored:
            logger.debug(f"Ignoring sectors not in {industry.code}: {', '.join(ignored)}")

        resolution = Resolution(
            dimension=dimension,
            industry_code=industry.code,
            method=ResolutionMethod.EMPTY,
            requested_sectors=requested,
            ignored_sectors=ignored,
        )

        if requested:
            sector_assocs: List[Association] = []
            if known:
                sector_assocs = self.repository.find_associations(AssociationQuery(
                    dimension=dimension,
                    industry_id=industry.id,
                    sector_ids=tuple(sector_ids_by_code[c] for c in known),
                ))

            targets, contributing = self._materialize(dimension, sector_assocs)
            if targets:
                resolution.method = ResolutionMethod.SECTOR
                resolution.targets = targets
                resolution.matched_sectors = [
                    code for code in known if sector_ids_by_code[code] in contributing
                ]
                logger.debug(
                    f"{dimension.value}: {len(targets)} sector-specific targets for "
                    f"{industry.code}/{','.join(resolution.matched_sectors)}"
                )
                return resolution

        all_assocs = self.repository.find_associations(AssociationQuery(
            dimension=dimension,
            industry_id=industry.id,
        ))
        targets, _ = self._materialize(dimension, all_assocs)
        resolution.targets = targets

        if targets:
            resolution.method = ResolutionMethod.FALLBACK if requested else ResolutionMethod.INDUSTRY
            if requested:
                logger.debug(
                    f"{dimension.value}: no sector-specific data for {industry.code}, "
                    f"fell back to {len(targets)} industry-level targets"
                )
        return resolution

    def _materialize(
        self,
        dimension: Dimension,
        associations: List[Association]
    ) -> Tuple[List[ResolvedTarget], set]:
        """
        Join associations to their catalog entries.

        Returns:
            (sorted unique targets, sector ids of associations that produced a target)
        """
        if not associations:
            return [], set()

        entries = self.repository.find_targets(dimension, (a.target_id for a in associations))

        targets: List[ResolvedTarget] = []
        contributing = set()
        for assoc in associations:
            # Usable only when the association and its target are both active
            if not assoc.is_active or not assoc.is_applicable:
                continue
            entry = entries.get(assoc.target_id)
            if entry is None or not entry.is_active:
                continue

            targets.append(ResolvedTarget(
                code=entry.code,
                name=assoc.custom_name or entry.name,
                description=assoc.custom_description or entry.description,
                category=entry.category,
                risk_profile=assoc.risk_profile_override or entry.risk_profile,
                sort_order=assoc.sort_order,
                jurisdiction=entry.jurisdiction,
                state=entry.state,
            ))
            if assoc.sector_id is not None:
                contributing.add(assoc.sector_id)

        return sort_and_deduplicate(targets), contributing


def resolve_dimensions(
    resolver: AssociationResolver,
    industry_code: str,
    sector_codes: Optional[Iterable[str]],
    dimensions: Iterable[Dimension]
) -> Dict[Dimension, Resolution]:
    """Resolve several dimensions against a single industry lookup."""
    industry = resolver.get_industry(industry_code)
    sectors = normalize_sector_codes(sector_codes)
    return {
        dimension: resolver.resolve(industry_code, sectors, dimension, industry=industry)
        for dimension in dimensions
    }
