"""
Pattern analysis tests

Canvas mining counts, per-industry confidence, ordering, the facility-only
variant, the industry report and canvas reconciliation.
"""
import pytest

from capopt_patterns.db.seed_repository import SeedCatalogRepository
from capopt_patterns.models.catalog import Dimension
from capopt_patterns.services.pattern_analysis import PatternAnalysisService, normalize_code


@pytest.fixture
def service(repository):
    return PatternAnalysisService(repository)


def _key(pattern):
    return (pattern.industry_code, pattern.sector_code, pattern.dimension, pattern.value)


class TestNormalizeCode:

    @pytest.mark.parametrize("raw,expected", [
        ("MINING_METALS", "MINING_METALS"),
        (" mining-metals ", "MINING_METALS"),
        ("Iron  Ore", "IRON_ORE"),
        ("__coal__", "COAL"),
        ("   ", None),
        (None, None),
    ])
    def test_normalize_code(self, raw, expected):
        assert normalize_code(raw) == expected


class TestAnalyzeExistingCanvases:

    def test_empty_store(self):
        service = PatternAnalysisService(SeedCatalogRepository.from_dict({}))

        result = service.analyze_existing_canvases()

        assert result.patterns == []
        assert result.statistics.total_canvases == 0
        assert result.statistics.patterns_generated == 0
        assert result.statistics.average_confidence == 0.0

    def test_counts_and_confidence(self, service):
        result = service.analyze_existing_canvases()
        by_key = {_key(p): p for p in result.patterns}

        open_pit_coal = by_key[("MINING", "COAL", Dimension.FACILITY, "OPEN_PIT_MINE")]
        assert open_pit_coal.occurrence_count == 2
        assert open_pit_coal.confidence == pytest.approx(0.6667)

        assert by_key[("MINING", "GOLD", Dimension.FACILITY, "UNDERGROUND_MINE")].occurrence_count == 1
        assert by_key[("AGRI", "WHEAT", Dimension.FACILITY, "SILO")].confidence == 1.0

    def test_repeated_value_in_one_canvas_counts_once(self, service):
        """cv1 lists OPEN_PIT_MINE twice under different spellings."""
        result = service.analyze_existing_canvases()
        by_key = {_key(p): p for p in result.patterns}

        # cv1 and cv2 only
        assert by_key[("MINING", "COAL", Dimension.FACILITY, "OPEN_PIT_MINE")].occurrence_count == 2

    def test_canvas_without_sectors_uses_null_sector(self, service):
        result = service.analyze_existing_canvases()
        keys = {_key(p) for p in result.patterns}

        assert ("MINING", None, Dimension.FACILITY, "CRUSHING_PLANT") in keys

    def test_inactive_and_unclassified_canvases_are_skipped(self, service):
        result = service.analyze_existing_canvases()
        values = {p.value for p in result.patterns}

        assert "SMELTER" not in values
        assert result.statistics.total_canvases == 6
        assert result.statistics.canvases_analyzed == 5
        assert result.statistics.industries == 3

    def test_statistics(self, service):
        result = service.analyze_existing_canvases()
        stats = result.statistics

        assert stats.patterns_generated == 7
        assert stats.by_dimension[Dimension.FACILITY] == 6
        assert stats.by_dimension[Dimension.COMPLIANCE] == 1
        assert stats.by_dimension[Dimension.OPERATIONAL] == 0
        assert stats.average_confidence == pytest.approx(0.4762, abs=1e-3)

    def test_patterns_are_ordered(self, service):
        result = service.analyze_existing_canvases()

        assert [_key(p) for p in result.patterns] == [
            ("AGRI", "WHEAT", Dimension.FACILITY, "SILO"),
            ("MINING", None, Dimension.FACILITY, "CRUSHING_PLANT"),
            ("MINING", "COAL", Dimension.FACILITY, "OPEN_PIT_MINE"),
            ("MINING", "COAL", Dimension.FACILITY, "UNDERGROUND_MINE"),
            ("MINING", "COAL", Dimension.COMPLIANCE, "WHS_ACT_2011"),
            ("MINING", "GOLD", Dimension.FACILITY, "OPEN_PIT_MINE"),
            ("MINING", "GOLD", Dimension.FACILITY, "UNDERGROUND_MINE"),
        ]

    def test_confidence_never_exceeds_one(self, service):
        for pattern in service.analyze_existing_canvases().patterns:
            assert 0.0 <= pattern.confidence <= 1.0
            assert pattern.occurrence_count >= 1


class TestFacilityPatterns:

    def test_only_facility_dimension(self, service):
        patterns = service.generate_facility_patterns()

        assert len(patterns) == 6
        assert all(p.dimension == Dimension.FACILITY for p in patterns)


class TestIndustryReport:

    def test_report_for_industry(self, service):
        report = service.industry_report("mining", ["COAL"], "Mackay QLD")

        assert report.industry == "mining"
        assert report.sectors == ["COAL"]
        assert report.patterns.total == 7
        assert report.patterns.industry_specific == 6
        assert report.patterns.facility_patterns == 5
        assert len(report.pattern_details[Dimension.COMPLIANCE]) == 1
        assert report.pattern_details[Dimension.REGULATORY] == []

    def test_report_for_unseen_industry(self, service):
        report = service.industry_report("OIL_GAS")

        assert report.patterns.industry_specific == 0
        assert report.patterns.total == 7


class TestReconciliation:

    def test_reports_drift(self, service):
        report = service.reconcile_canvases()

        assert report.total_canvases == 6
        assert report.unknown_industries == {"AGRI": ["cv4"]}
        assert report.missing_industry == ["cv5"]
        assert [(u.canvas_id, u.industry, u.sector) for u in report.unmatched_sectors] == [
            ("cv7", "EMPTY_IND", "Y"),
        ]

    def test_bundled_seed(self, seed_repository):
        report = PatternAnalysisService(seed_repository).reconcile_canvases()

        assert report.unknown_industries == {"AGRICULTURE": ["canvas-005"]}
        assert report.missing_industry == ["canvas-006"]
        assert report.unmatched_sectors == []
