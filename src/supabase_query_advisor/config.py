import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from supabase_query_advisor.api import SupabaseRestClient
from supabase_query_advisor.core import QueryAdvisor
from supabase_query_advisor.domain import ConfigurationError
from supabase_query_advisor.execution import SupabaseExecutionBackend
from supabase_query_advisor.metrics import AlertPolicy
from supabase_query_advisor.storage import SupabaseAdvisoryStore


class AdvisorSettings(BaseSettings):
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    REQUEST_TIMEOUT: float = 30.0

    SLOW_QUERY_THRESHOLD_MS: float = 1000.0
    HIGH_MEMORY_THRESHOLD_MB: float = 100.0

    SQS_QUEUE_URL: str | None = None
    AWS_REGION: str = "us-east-1"

    LOG_LEVEL: str = "INFO"

    # Read from the environment, then the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> AdvisorSettings:
    return AdvisorSettings()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging; unknown level names fall back to INFO."""
    logging.basicConfig(
        level=logging.getLevelNamesMapping().get(level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_client(settings: AdvisorSettings) -> SupabaseRestClient:
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_KEY must be set")
    return SupabaseRestClient(
        settings.SUPABASE_URL, settings.SUPABASE_KEY, timeout=settings.REQUEST_TIMEOUT
    )


def build_advisor(settings: AdvisorSettings, client: SupabaseRestClient) -> QueryAdvisor:
    """Wire the Supabase collaborators around an opened REST client."""
    return QueryAdvisor(
        backend=SupabaseExecutionBackend(client),
        store=SupabaseAdvisoryStore(client),
        alert_policy=AlertPolicy(
            slow_query_threshold_ms=settings.SLOW_QUERY_THRESHOLD_MS,
            high_memory_threshold_mb=settings.HIGH_MEMORY_THRESHOLD_MB,
        ),
    )
