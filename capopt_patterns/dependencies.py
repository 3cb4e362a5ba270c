"""
FastAPI dependencies

The repository is built once per process from settings. Tests replace it
through app.dependency_overrides[get_repository].
"""
from functools import lru_cache
import logging

from fastapi import Depends

from capopt_patterns.config import get_settings
from capopt_patterns.db.repository import CatalogRepository, SupabaseCatalogRepository
from capopt_patterns.db.seed_repository import SeedCatalogRepository
from capopt_patterns.db.supabase_client import get_supabase_client
from capopt_patterns.services.association_resolver import AssociationResolver
from capopt_patterns.services.pattern_analysis import PatternAnalysisService
from capopt_patterns.services.pattern_engine import PatternEngine

logger = logging.getLogger(__name__)

CATALOG_SOURCES = ("seed", "supabase")


@lru_cache()
def get_repository() -> CatalogRepository:
    settings = get_settings()
    source = settings.catalog_source.lower()

    if source == "supabase":
        logger.info("Catalog source: supabase")
        return SupabaseCatalogRepository(get_supabase_client(settings))
    if source == "seed":
        logger.info(f"Catalog source: seed ({settings.seed_path})")
        return SeedCatalogRepository.from_file(settings.seed_path)

    raise ValueError(f"Unknown catalog_source '{settings.catalog_source}', expected one of {CATALOG_SOURCES}")


def get_resolver(repository: CatalogRepository = Depends(get_repository)) -> AssociationResolver:
    return AssociationResolver(repository)


def get_pattern_engine(repository: CatalogRepository = Depends(get_repository)) -> PatternEngine:
    return PatternEngine(repository)


def get_analysis_service(repository: CatalogRepository = Depends(get_repository)) -> PatternAnalysisService:
    return PatternAnalysisService(repository)
