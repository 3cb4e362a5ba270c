"""
Schema Mapping: Table Names and Row Normalisation
==================================================

Maps logical table names to physical table names and converts raw rows
(snake_case column dicts, as returned by Supabase or stored in the seed file)
into catalog models.

Association tables carry one target foreign key column per dimension:
- industry_facility_type_associations.facility_type_id
- industry_operational_stream_associations.operational_stream_id
- industry_compliance_requirement_associations.compliance_requirement_id
- industry_regulatory_framework_associations.regulatory_framework_id
"""

from typing import Any, Dict, List, Optional

from capopt_patterns.models.catalog import (
    Association,
    Canvas,
    CatalogEntry,
    Dimension,
    Industry,
    Jurisdiction,
    Sector,
)

TABLE_MAP = {
    "industries": "industries",
    "sectors": "sectors",
    "facility_types": "facility_types",
    "operational_streams": "operational_streams",
    "compliance_requirements": "compliance_requirements",
    "regulatory_frameworks": "regulatory_frameworks",
    "industry_facility_type_associations": "industry_facility_type_associations",
    "industry_operational_stream_associations": "industry_operational_stream_associations",
    "industry_compliance_requirement_associations": "industry_compliance_requirement_associations",
    "industry_regulatory_framework_associations": "industry_regulatory_framework_associations",
    "business_canvases": "business_canvases",
}

# dimension -> (catalog table, association table, target FK column)
DIMENSION_TABLES = {
    Dimension.FACILITY: (
        "facility_types",
        "industry_facility_type_associations",
        "facility_type_id",
    ),
    Dimension.OPERATIONAL: (
        "operational_streams",
        "industry_operational_stream_associations",
        "operational_stream_id",
    ),
    Dimension.COMPLIANCE: (
        "compliance_requirements",
        "industry_compliance_requirement_associations",
        "compliance_requirement_id",
    ),
    Dimension.REGULATORY: (
        "regulatory_frameworks",
        "industry_regulatory_framework_associations",
        "regulatory_framework_id",
    ),
}


def get_table(logical_name: str) -> str:
    """
    Resolve logical table name to physical table name.

    Example:
        >>> get_table("sectors")
        'sectors'
        >>> get_table("unknown_table")  # Not in map - returns as-is
        'unknown_table'
    """
    return TABLE_MAP.get(logical_name, logical_name)


def catalog_table(dimension: Dimension) -> str:
    return get_table(DIMENSION_TABLES[dimension][0])


def association_table(dimension: Dimension) -> str:
    return get_table(DIMENSION_TABLES[dimension][1])


def target_column(dimension: Dimension) -> str:
    return DIMENSION_TABLES[dimension][2]


def split_codes(value: Any) -> List[str]:
    """Accept a list, a comma-separated string or None; return stripped non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    else:
        parts = [str(v) for v in value if v is not None]
    return [p.strip() for p in parts if p and p.strip()]


def _jurisdiction(value: Optional[str]) -> Optional[Jurisdiction]:
    if not value:
        return None
    try:
        return Jurisdiction(str(value).upper())
    except ValueError:
        return None


def normalize_sector(row: Dict[str, Any]) -> Sector:
    return Sector(
        id=str(row["id"]),
        code=row["code"],
        name=row.get("name") or row["code"],
        description=row.get("description"),
        category=row.get("category"),
        risk_profile=row.get("risk_profile"),
        industry_id=str(row["industry_id"]),
        sort_order=row.get("sort_order") or 0,
        is_active=row.get("is_active", True),
    )


def normalize_industry(row: Dict[str, Any], sector_rows: Optional[List[Dict[str, Any]]] = None) -> Industry:
    if sector_rows is None:
        # Supabase embedded select: industries?select=*,sectors(*)
        sector_rows = row.get("sectors") or []
    sectors = [normalize_sector(s) for s in sector_rows]
    return Industry(
        id=str(row["id"]),
        code=row["code"],
        name=row.get("name") or row["code"],
        description=row.get("description"),
        category=row.get("category"),
        sort_order=row.get("sort_order") or 0,
        is_active=row.get("is_active", True),
        sectors=sorted(sectors, key=lambda s: (s.sort_order, s.name)),
    )


def normalize_catalog_entry(row: Dict[str, Any]) -> CatalogEntry:
    state = row.get("state")
    return CatalogEntry(
        id=str(row["id"]),
        code=row["code"],
        name=row.get("name") or row["code"],
        description=row.get("description"),
        category=row.get("category"),
        risk_profile=row.get("risk_profile"),
        sort_order=row.get("sort_order") or 0,
        is_active=row.get("is_active", True),
        jurisdiction=_jurisdiction(row.get("jurisdiction")),
        state=str(state).upper() if state else None,
    )


def normalize_association(row: Dict[str, Any], dimension: Dimension) -> Association:
    sector_id = row.get("sector_id")
    return Association(
        id=str(row["id"]),
        dimension=dimension,
        industry_id=str(row["industry_id"]),
        target_id=str(row[target_column(dimension)]),
        sector_id=str(sector_id) if sector_id is not None else None,
        is_applicable=row.get("is_applicable", True),
        is_active=row.get("is_active", True),
        sort_order=row.get("sort_order") or 0,
        custom_name=row.get("custom_name"),
        custom_description=row.get("custom_description"),
        risk_profile_override=row.get("risk_profile_override"),
    )


def normalize_canvas(row: Dict[str, Any]) -> Canvas:
    industry = row.get("industry")
    return Canvas(
        id=str(row["id"]),
        name=row.get("name") or "",
        industry=industry.strip() if isinstance(industry, str) and industry.strip() else None,
        sectors=split_codes(row.get("sectors")),
        facility_types=split_codes(row.get("facility_types")),
        operational_streams=split_codes(row.get("operational_streams")),
        compliance_requirements=split_codes(row.get("compliance_requirements")),
        regulatory_frameworks=split_codes(row.get("regulatory_frameworks")),
        is_active=row.get("is_active", True),
    )
