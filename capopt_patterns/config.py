"""
CapOpt Pattern Service Configuration
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_PATH = Path(__file__).parent / "data" / "seed_catalog.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Catalog backend: "supabase" reads the relational store,
    # "seed" loads the JSON seed file into memory
    catalog_source: str = "seed"
    seed_path: Path = DEFAULT_SEED_PATH

    # Supabase (required when catalog_source == "supabase")
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
