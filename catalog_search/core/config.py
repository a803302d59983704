from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    app_name: str = Field(default="catalog-search")
    environment: str = Field(default="dev")
    log_level: str = Field(default="INFO")
    # Static record set: .json | .csv | .parquet
    catalog_path: str = Field(default="data/catalog.json")
    # Category filter value that disables filtering
    all_category: str = Field(default="all")
    # Working language for alphabetical ordering (CLDR-style locale id; "root" = plain UCA)
    collation_locale: str = Field(default="ru")
    allowed_origins: List[str] = Field(default_factory=list, description="CORS allowed origins")
    # Recent queries (host-side persistence)
    recent_queries_path: str = Field(default="data/recent_queries.json")
    recent_queries_key: str = Field(default="recent_searches_v1")
    recent_queries_limit: int = Field(default=8)

    class Config:
        env_file = ".env"


settings = Settings()
