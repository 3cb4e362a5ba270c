"""
Catalog models for CapOpt reference data

Industries, sectors, catalog entries (facility types, operational streams,
compliance requirements, regulatory frameworks) and the association rows that
link an industry, and optionally a sector, to a catalog entry.

Reference data is read-only for this service. Rows are seeded and administered
out-of-band.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Dimension(str, Enum):
    """Target dimension an association points at"""
    FACILITY = "facility"
    OPERATIONAL = "operational"
    COMPLIANCE = "compliance"
    REGULATORY = "regulatory"


# Order used for output sorting and per-dimension loops
DIMENSION_ORDER: List[Dimension] = [
    Dimension.FACILITY,
    Dimension.OPERATIONAL,
    Dimension.COMPLIANCE,
    Dimension.REGULATORY,
]


class SectorCategory(str, Enum):
    COMMODITY = "COMMODITY"
    VALUE_CHAIN = "VALUE_CHAIN"
    BUSINESS_MODEL = "BUSINESS_MODEL"
    SUPPORT_SERVICES = "SUPPORT_SERVICES"


class Jurisdiction(str, Enum):
    FEDERAL = "FEDERAL"
    STATE = "STATE"
    INDUSTRY = "INDUSTRY"
    INTERNATIONAL = "INTERNATIONAL"


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys on the wire"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Sector(CamelModel):
    """Sub-classification within an industry"""

    id: str
    code: str
    name: str
    description: Optional[str] = None
    category: Optional[SectorCategory] = None
    risk_profile: Optional[str] = None
    industry_id: str
    sort_order: int = 0
    is_active: bool = True


class Industry(CamelModel):
    """Top-level business-domain classification"""

    id: str
    code: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True
    sectors: List[Sector] = Field(default_factory=list)

    def active_sectors(self) -> List[Sector]:
        return sorted(
            (s for s in self.sectors if s.is_active),
            key=lambda s: (s.sort_order, s.name),
        )


@dataclass
class CatalogEntry:
    """Global catalog row for any of the four dimensions"""

    id: str
    code: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    risk_profile: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True
    # Compliance and regulatory entries only
    jurisdiction: Optional[Jurisdiction] = None
    state: Optional[str] = None


@dataclass
class Association:
    """Industry (and optional sector) to catalog entry link"""

    id: str
    dimension: Dimension
    industry_id: str
    target_id: str
    sector_id: Optional[str] = None
    is_applicable: bool = True
    is_active: bool = True
    sort_order: int = 0
    custom_name: Optional[str] = None
    custom_description: Optional[str] = None
    risk_profile_override: Optional[str] = None


@dataclass
class Canvas:
    """
    Business canvas as seen by pattern analysis

    industry and sectors are free text owned by the canvas CRUD layer, not
    references into the catalog.
    """

    id: str
    name: str = ""
    industry: Optional[str] = None
    sectors: List[str] = field(default_factory=list)
    facility_types: List[str] = field(default_factory=list)
    operational_streams: List[str] = field(default_factory=list)
    compliance_requirements: List[str] = field(default_factory=list)
    regulatory_frameworks: List[str] = field(default_factory=list)
    is_active: bool = True

    def values_for(self, dimension: Dimension) -> List[str]:
        return {
            Dimension.FACILITY: self.facility_types,
            Dimension.OPERATIONAL: self.operational_streams,
            Dimension.COMPLIANCE: self.compliance_requirements,
            Dimension.REGULATORY: self.regulatory_frameworks,
        }[dimension]


class ResolvedTarget(CamelModel):
    """Catalog entry after association overrides have been applied"""

    code: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    risk_profile: Optional[str] = None
    sort_order: int = 0
    jurisdiction: Optional[Jurisdiction] = None
    state: Optional[str] = None
