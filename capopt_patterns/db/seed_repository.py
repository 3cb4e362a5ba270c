"""
In-memory catalog repository loaded from a JSON seed

The seed mirrors the relational layout: one key per logical table name
(see schema_mapping.TABLE_MAP), each holding a list of snake_case rows.
Sectors are stored in their own table and joined by industry_id.
"""
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import json
import logging

from capopt_patterns.db.query import (
    ORDER_BY,
    AssociationQuery,
    build_association_filters,
    row_matches,
)
from capopt_patterns.db.repository import CatalogRepository
from capopt_patterns.db.schema_mapping import (
    DIMENSION_TABLES,
    TABLE_MAP,
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


def _active(row: Dict[str, Any]) -> bool:
    return row.get("is_active", True) is not False


def _sort_key(row: Dict[str, Any]):
    return (row.get(ORDER_BY) or 0, str(row.get("id")))


class SeedCatalogRepository(CatalogRepository):
    """Catalog repository over plain row dicts held in memory"""

    def __init__(self, tables: Dict[str, List[Dict[str, Any]]]):
        unknown = set(tables) - set(TABLE_MAP)
        if unknown:
            logger.warning(f"Ignoring unknown seed tables: {sorted(unknown)}")
        self.tables = {name: list(tables.get(name) or []) for name in TABLE_MAP}

    @classmethod
    def from_dict(cls, data: Dict[str, List[Dict[str, Any]]]) -> "SeedCatalogRepository":
        return cls(data)

    @classmethod
    def from_file(cls, path: Path) -> "SeedCatalogRepository":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Loaded catalog seed from {path}")
        return cls(data)

    def _industry(self, row: Dict[str, Any]) -> Industry:
        sector_rows = [
            s for s in self.tables["sectors"]
            if str(s.get("industry_id")) == str(row["id"])
        ]
        return normalize_industry(row, sector_rows)

    def find_industry_by_code(self, code: str) -> Optional[Industry]:
        for row in self.tables["industries"]:
            if row.get("code") == code and _active(row):
                return self._industry(row)
        return None

    def list_industries(self) -> List[Industry]:
        rows = sorted((r for r in self.tables["industries"] if _active(r)), key=_sort_key)
        return [self._industry(row) for row in rows]

    def find_associations(self, query: AssociationQuery) -> List[Association]:
        _, table, _ = DIMENSION_TABLES[query.dimension]
        filters = build_association_filters(query)
        rows = [row for row in self.tables[table] if row_matches(row, filters)]
        return [normalize_association(row, query.dimension) for row in sorted(rows, key=_sort_key)]

    def find_targets(self, dimension: Dimension, target_ids: Iterable[str]) -> Dict[str, CatalogEntry]:
        wanted = {str(t) for t in target_ids}
        table, _, _ = DIMENSION_TABLES[dimension]
        return {
            str(row["id"]): normalize_catalog_entry(row)
            for row in self.tables[table]
            if str(row["id"]) in wanted
        }

    def find_all_canvases(self) -> List[Canvas]:
        rows = sorted(
            (r for r in self.tables["business_canvases"] if _active(r)),
            key=lambda r: str(r["id"]),
        )
        return [normalize_canvas(row) for row in rows]
