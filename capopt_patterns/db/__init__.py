"""
Data access for the CapOpt pattern service
"""
from .query import AssociationQuery, QueryFilter, build_association_filters
from .repository import CatalogRepository, SupabaseCatalogRepository
from .seed_repository import SeedCatalogRepository

__all__ = [
    "AssociationQuery",
    "QueryFilter",
    "build_association_filters",
    "CatalogRepository",
    "SupabaseCatalogRepository",
    "SeedCatalogRepository",
]
