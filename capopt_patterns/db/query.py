"""
Typed association query parameters and the filter builder

Every backend maps an AssociationQuery through build_association_filters(),
so the Supabase query builder and the in-memory seed store see the exact same
filter list.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from capopt_patterns.db.schema_mapping import target_column
from capopt_patterns.models.catalog import Dimension

EQ = "eq"
IN = "in"


@dataclass(frozen=True)
class AssociationQuery:
    """
    Parameters for one association lookup.

    sector_ids=None means "any sector, including industry-level rows";
    a tuple restricts to rows scoped to one of those sectors.
    """

    dimension: Dimension
    industry_id: str
    sector_ids: Optional[Sequence[str]] = None
    applicable_only: bool = True
    active_only: bool = True


@dataclass(frozen=True)
class QueryFilter:
    column: str
    operator: str
    value: Any


# Name ties are broken after target resolution
ORDER_BY = "sort_order"


def build_association_filters(query: AssociationQuery) -> List[QueryFilter]:
    """Map query parameters to an ordered filter list."""
    filters = [QueryFilter("industry_id", EQ, query.industry_id)]
    if query.active_only:
        filters.append(QueryFilter("is_active", EQ, True))
    if query.applicable_only:
        filters.append(QueryFilter("is_applicable", EQ, True))
    if query.sector_ids is not None:
        filters.append(QueryFilter("sector_id", IN, sorted(set(query.sector_ids))))
    return filters


def apply_filters(builder, filters: List[QueryFilter]):
    """Apply filters to a Supabase (postgrest) query builder."""
    for f in filters:
        if f.operator == EQ:
            builder = builder.eq(f.column, f.value)
        elif f.operator == IN:
            builder = builder.in_(f.column, list(f.value))
        else:
            raise ValueError(f"Unsupported filter operator: {f.operator}")
    return builder


def row_matches(row: Dict[str, Any], filters: List[QueryFilter]) -> bool:
    """Evaluate filters against a raw row dict (in-memory backend)."""
    for f in filters:
        value = row.get(f.column)
        if f.column in ("is_active", "is_applicable") and value is None:
            value = True
        if f.operator == EQ:
            if isinstance(f.value, bool):
                if bool(value) is not f.value:
                    return False
            elif value is None or str(value) != str(f.value):
                return False
        elif f.operator == IN:
            if value is None or str(value) not in {str(v) for v in f.value}:
                return False
        else:
            raise ValueError(f"Unsupported filter operator: {f.operator}")
    return True


def association_select(dimension: Dimension) -> str:
    """SELECT clause for association rows."""
    return ",".join([
        "id",
        "industry_id",
        "sector_id",
        target_column(dimension),
        "is_applicable",
        "is_active",
        "sort_order",
        "custom_name",
        "custom_description",
        "risk_profile_override",
    ])
