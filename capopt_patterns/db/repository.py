"""
Catalog repository

Read-only data access for the resolver, engine and analysis service.
Services receive a repository instance explicitly; nothing here is a
module-level singleton.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
import logging

from capopt_patterns.db.query import (
    ORDER_BY,
    AssociationQuery,
    apply_filters,
    association_select,
    build_association_filters,
)
from capopt_patterns.db.schema_mapping import (
    association_table,
    catalog_table,
    get_table,
    normalize_association,
    normalize_canvas,
    normalize_catalog_entry,
    normalize_industry,
)
from capopt_patterns.models.catalog import (
    Association,
    Canvas,
    CatalogEntry,
    Dimension,
    Industry,
)

logger = logging.getLogger(__name__)

CANVAS_COLUMNS = (
    "id,name,industry,sectors,facility_types,operational_streams,"
    "compliance_requirements,regulatory_frameworks,is_active"
)


class CatalogRepository(ABC):
    """Read interface over reference data and canvases"""

    @abstractmethod
    def find_industry_by_code(self, code: str) -> Optional[Industry]:
        """Active industry with its sectors, or None."""

    @abstractmethod
    def list_industries(self) -> List[Industry]:
        """Active industries ordered by sort_order."""

    @abstractmethod
    def find_associations(self, query: AssociationQuery) -> List[Association]:
        """Association rows matching the query, ordered by sort_order."""

    @abstractmethod
    def find_targets(self, dimension: Dimension, target_ids: Iterable[str]) -> Dict[str, CatalogEntry]:
        """Catalog entries keyed by id. Inactive entries are included."""

    @abstractmethod
    def find_all_canvases(self) -> List[Canvas]:
        """Active canvases with their free-text classification fields."""


class SupabaseCatalogRepository(CatalogRepository):
    """
    Catalog repository backed by Supabase (PostgREST query builder).
    """

    def __init__(self, supabase_client):
        self.db = supabase_client

    def find_industry_by_code(self, code: str) -> Optional[Industry]:
        result = self.db.table(get_table("industries")).select(
            "*, sectors(*)"
        ).eq("code", code).eq("is_active", True).limit(1).execute()

        rows = (result.data if result else None) or []
        if not rows:
            return None
        return normalize_industry(rows[0])

    def list_industries(self) -> List[Industry]:
        result = self.db.table(get_table("industries")).select(
            "*, sectors(*)"
        ).eq("is_active", True).order(ORDER_BY).execute()

        return [normalize_industry(row) for row in (result.data or [])]

    def find_associations(self, query: AssociationQuery) -> List[Association]:
        builder = self.db.table(association_table(query.dimension)).select(
            association_select(query.dimension)
        )
        builder = apply_filters(builder, build_association_filters(query))
        result = builder.order(ORDER_BY).execute()

        rows = result.data or []
        logger.debug(
            f"{len(rows)} {query.dimension.value} associations for industry "
            f"{query.industry_id} (sectors={query.sector_ids})"
        )
        return [normalize_association(row, query.dimension) for row in rows]

    def find_targets(self, dimension: Dimension, target_ids: Iterable[str]) -> Dict[str, CatalogEntry]:
        ids = sorted(set(target_ids))
        if not ids:
            return {}

        result = self.db.table(catalog_table(dimension)).select("*").in_("id", ids).execute()

        entries = [normalize_catalog_entry(row) for row in (result.data or [])]
        return {entry.id: entry for entry in entries}

    def find_all_canvases(self) -> List[Canvas]:
        result = self.db.table(get_table("business_canvases")).select(
            CANVAS_COLUMNS
        ).eq("is_active", True).order("id").execute()

        return [normalize_canvas(row) for row in (result.data or [])]
