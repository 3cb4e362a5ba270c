"""
PyTest fixtures for the pattern service

Provides:
- catalog_rows: a small relational catalog as raw snake_case rows
- repository: SeedCatalogRepository over catalog_rows
- seed_repository: SeedCatalogRepository over the bundled seed file
- fixed_clock: deterministic clock for PatternEngine
- client: TestClient with the repository dependency overridden
"""
from datetime import datetime, timezone
import copy

import pytest
from fastapi.testclient import TestClient

from capopt_patterns.config import DEFAULT_SEED_PATH
from capopt_patterns.db.seed_repository import SeedCatalogRepository

FIXED_NOW = datetime(2026, 1, 21, 12, 0, 0, tzinfo=timezone.utc)


CATALOG_ROWS = {
    "industries": [
        {"id": "i1", "code": "MINING", "name": "Mining", "sort_order": 1},
        {"id": "i2", "code": "EMPTY_IND", "name": "Empty Industry", "sort_order": 2},
        {"id": "i3", "code": "DEAD", "name": "Retired Industry", "sort_order": 3, "is_active": False},
    ],
    "sectors": [
        {"id": "s1", "industry_id": "i1", "code": "COAL", "name": "Coal", "category": "COMMODITY", "sort_order": 1},
        {"id": "s2", "industry_id": "i1", "code": "GOLD", "name": "Gold", "category": "COMMODITY", "sort_order": 2},
        {"id": "s3", "industry_id": "i1", "code": "LITHIUM", "name": "Lithium", "category": "COMMODITY", "sort_order": 3},
        {"id": "s4", "industry_id": "i1", "code": "OLD", "name": "Old Sector", "sort_order": 4, "is_active": False},
        {"id": "s5", "industry_id": "i2", "code": "X", "name": "Sector X", "sort_order": 1},
    ],
    "facility_types": [
        {"id": "f1", "code": "OPEN_PIT_MINE", "name": "Open Pit Mine", "risk_profile": "HIGH", "sort_order": 1},
        {"id": "f2", "code": "UNDERGROUND_MINE", "name": "Underground Mine", "risk_profile": "HIGH", "sort_order": 2},
        {"id": "f3", "code": "CRUSHING_PLANT", "name": "Crushing Plant", "sort_order": 3},
        {"id": "f4", "code": "RETIRED_PLANT", "name": "Retired Plant", "sort_order": 4, "is_active": False},
    ],
    "operational_streams": [
        {"id": "o1", "code": "MINING_OPERATIONS", "name": "Mining Operations", "sort_order": 1},
    ],
    "compliance_requirements": [
        {"id": "c1", "code": "WHS_ACT_2011", "name": "WHS Act", "jurisdiction": "FEDERAL", "sort_order": 1},
        {"id": "c2", "code": "QLD_COAL_ACT", "name": "QLD Coal Act", "jurisdiction": "STATE", "state": "qld", "sort_order": 2},
        {"id": "c3", "code": "NSW_MINES_ACT", "name": "NSW Mines Act", "jurisdiction": "STATE", "state": "NSW", "sort_order": 3},
    ],
    "regulatory_frameworks": [],
    "industry_facility_type_associations": [
        {"id": "a1", "industry_id": "i1", "sector_id": "s1", "facility_type_id": "f1", "sort_order": 1},
        {"id": "a2", "industry_id": "i1", "sector_id": "s2", "facility_type_id": "f1", "sort_order": 1},
        {"id": "a3", "industry_id": "i1", "sector_id": "s2", "facility_type_id": "f2", "sort_order": 2,
         "custom_name": "Deep Gold Mine", "risk_profile_override": "CRITICAL"},
        {"id": "a4", "industry_id": "i1", "sector_id": None, "facility_type_id": "f3", "sort_order": 3},
        {"id": "a5", "industry_id": "i1", "sector_id": "s1", "facility_type_id": "f4", "sort_order": 4},
        {"id": "a6", "industry_id": "i1", "sector_id": "s1", "facility_type_id": "f2", "sort_order": 2,
         "is_applicable": False},
    ],
    "industry_operational_stream_associations": [
        {"id": "b1", "industry_id": "i1", "sector_id": None, "operational_stream_id": "o1", "sort_order": 1},
    ],
    "industry_compliance_requirement_associations": [
        {"id": "d1", "industry_id": "i1", "sector_id": "s1", "compliance_requirement_id": "c1", "sort_order": 1},
        {"id": "d2", "industry_id": "i1", "sector_id": "s1", "compliance_requirement_id": "c2", "sort_order": 2},
        {"id": "d3", "industry_id": "i1", "sector_id": "s1", "compliance_requirement_id": "c3", "sort_order": 3},
    ],
    "industry_regulatory_framework_associations": [],
    "business_canvases": [
        {"id": "cv1", "name": "Coal One", "industry": "MINING", "sectors": ["COAL"],
         "facility_types": ["OPEN_PIT_MINE", "open pit mine"], "compliance_requirements": ["WHS_ACT_2011"]},
        {"id": "cv2", "name": "Coal and Gold", "industry": "mining", "sectors": "COAL, GOLD",
         "facility_types": "OPEN_PIT_MINE,UNDERGROUND_MINE"},
        {"id": "cv3", "name": "Crusher", "industry": "MINING", "sectors": [],
         "facility_types": ["CRUSHING_PLANT"]},
        {"id": "cv4", "name": "Farm", "industry": "AGRI", "sectors": ["WHEAT"], "facility_types": ["SILO"]},
        {"id": "cv5", "name": "No Industry", "industry": None},
        {"id": "cv6", "name": "Archived", "industry": "MINING", "sectors": ["COAL"],
         "facility_types": ["SMELTER"], "is_active": False},
        {"id": "cv7", "name": "Drifted", "industry": "EMPTY_IND", "sectors": ["Y"]},
    ],
}


@pytest.fixture
def catalog_rows():
    return copy.deepcopy(CATALOG_ROWS)


@pytest.fixture
def repository(catalog_rows):
    return SeedCatalogRepository.from_dict(catalog_rows)


@pytest.fixture
def seed_repository():
    return SeedCatalogRepository.from_file(DEFAULT_SEED_PATH)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def client(repository):
    from capopt_patterns.dependencies import get_repository
    from capopt_patterns.main import app

    app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()
