"""
Supabase catalog repository tests

The Supabase client is a MagicMock; the query builder returns itself from
every chained call so the final execute() result can be set per test.
"""
from unittest.mock import MagicMock, call

import pytest

from capopt_patterns.config import Settings
from capopt_patterns.db.query import AssociationQuery
from capopt_patterns.db.repository import CANVAS_COLUMNS, SupabaseCatalogRepository
from capopt_patterns.db.supabase_client import get_supabase_client
from capopt_patterns.models.catalog import Dimension


def _builder(rows):
    builder = MagicMock()
    for method in ("select", "eq", "in_", "order", "limit"):
        getattr(builder, method).return_value = builder
    builder.execute.return_value = MagicMock(data=rows)
    return builder


@pytest.fixture
def make_repo():
    def _make(rows):
        client = MagicMock()
        builder = _builder(rows)
        client.table.return_value = builder
        return SupabaseCatalogRepository(client), client, builder
    return _make


class TestIndustries:

    def test_find_industry_by_code(self, make_repo):
        repo, client, builder = make_repo([{
            "id": "i1",
            "code": "MINING",
            "name": "Mining",
            "sectors": [{"id": "s1", "industry_id": "i1", "code": "COAL", "name": "Coal"}],
        }])

        industry = repo.find_industry_by_code("MINING")

        client.table.assert_called_once_with("industries")
        builder.select.assert_called_once_with("*, sectors(*)")
        builder.eq.assert_has_calls([call("code", "MINING"), call("is_active", True)])
        builder.limit.assert_called_once_with(1)
        assert industry.code == "MINING"
        assert [s.code for s in industry.sectors] == ["COAL"]

    def test_find_industry_missing(self, make_repo):
        repo, _, _ = make_repo([])

        assert repo.find_industry_by_code("NOPE") is None

    def test_list_industries(self, make_repo):
        repo, _, builder = make_repo([
            {"id": "i1", "code": "MINING", "name": "Mining"},
            {"id": "i2", "code": "OIL_GAS", "name": "Oil & Gas"},
        ])

        industries = repo.list_industries()

        builder.order.assert_called_once_with("sort_order")
        assert [i.code for i in industries] == ["MINING", "OIL_GAS"]


class TestAssociations:

    def test_sector_scoped_query(self, make_repo):
        repo, client, builder = make_repo([
            {"id": "a1", "industry_id": "i1", "sector_id": "s1", "facility_type_id": "f1", "sort_order": 1},
        ])

        assocs = repo.find_associations(
            AssociationQuery(Dimension.FACILITY, "i1", sector_ids=("s1",))
        )

        client.table.assert_called_once_with("industry_facility_type_associations")
        builder.eq.assert_has_calls([
            call("industry_id", "i1"),
            call("is_active", True),
            call("is_applicable", True),
        ])
        builder.in_.assert_called_once_with("sector_id", ["s1"])
        builder.order.assert_called_once_with("sort_order")
        assert assocs[0].target_id == "f1"
        assert assocs[0].dimension == Dimension.FACILITY

    def test_industry_level_query_has_no_sector_filter(self, make_repo):
        repo, _, builder = make_repo([])

        assert repo.find_associations(AssociationQuery(Dimension.REGULATORY, "i1")) == []
        builder.in_.assert_not_called()


class TestTargets:

    def test_find_targets_by_id(self, make_repo):
        repo, client, builder = make_repo([
            {"id": "c1", "code": "WHS_ACT_2011", "name": "WHS Act", "jurisdiction": "FEDERAL"},
        ])

        entries = repo.find_targets(Dimension.COMPLIANCE, ["c1", "c1"])

        client.table.assert_called_once_with("compliance_requirements")
        builder.in_.assert_called_once_with("id", ["c1"])
        assert entries["c1"].code == "WHS_ACT_2011"

    def test_no_ids_skips_query(self, make_repo):
        repo, client, _ = make_repo([])

        assert repo.find_targets(Dimension.FACILITY, []) == {}
        client.table.assert_not_called()


def test_find_all_canvases(make_repo):
    repo, client, builder = make_repo([
        {"id": "cv1", "industry": "MINING", "sectors": "COAL,GOLD", "facility_types": None},
    ])

    canvases = repo.find_all_canvases()

    client.table.assert_called_once_with("business_canvases")
    builder.select.assert_called_once_with(CANVAS_COLUMNS)
    builder.eq.assert_called_once_with("is_active", True)
    assert canvases[0].sectors == ["COAL", "GOLD"]
    assert canvases[0].facility_types == []


def test_supabase_client_requires_credentials():
    settings = Settings(supabase_url=None, supabase_service_key=None)

    with pytest.raises(RuntimeError):
        get_supabase_client(settings)
