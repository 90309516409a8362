from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings.
    """
    model_config = SettingsConfigDict(env_prefix="SPEED_TEST_", env_file=".env", extra="ignore")

    # Service Info
    service_name: str = "speed-test"
    environment: str = "local"
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Lookup cache
    lookup_cache_ttl_seconds: float = 60.0
    lookup_cache_max_entries: int = 1024

    # Outbound lookups
    lookup_timeout_seconds: float = 3.0
    proxycheck_enabled: bool = True
    proxycheck_base_url: str = "https://proxycheck.io/v2"
    ipinfo_base_url: str = "https://ipinfo.io"

    # Credentials (bare env names, no prefix)
    ipinfo_token: Optional[str] = Field(default=None, validation_alias="IPINFO_TOKEN")
    proxycheck_key: Optional[str] = Field(default=None, validation_alias="PROXYCHECK_KEY")

settings = Settings()
