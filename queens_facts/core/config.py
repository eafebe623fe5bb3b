from pydantic import BaseModel
from dotenv import load_dotenv
import os

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings(BaseModel):
    APP_ENV: str = os.getenv("APP_ENV", "development")

    # Supabase
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_SERVICE_ROLE_KEY: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")

    # Tables / RPC
    FACTS_TABLE: str = os.getenv("FACTS_TABLE", "neighborhood_fun_facts")
    AUDIT_TABLE: str = os.getenv("AUDIT_TABLE", "queens_facts_audit")
    ENDPOINT_AUDIT_TABLE: str = os.getenv("ENDPOINT_AUDIT_TABLE", "endpoint_audit")
    RANDOM_FACTS_RPC: str = os.getenv("RANDOM_FACTS_RPC", "random_facts")

    # Query behaviour
    RANDOM_STRATEGY: str = os.getenv("RANDOM_STRATEGY", "in_process")
    FUZZY_CUTOFF: int = int(os.getenv("FUZZY_CUTOFF", "60"))

    # Request auditing
    ENDPOINT_AUDIT_ENABLED: bool = _env_bool("ENDPOINT_AUDIT_ENABLED", "true")

    # Rate limiting (slowapi limit string)
    RATE_LIMIT: str = os.getenv("RATE_LIMIT", "50/15minutes")
    RATE_LIMIT_ENABLED: bool = _env_bool("RATE_LIMIT_ENABLED", "true")

    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.strip().lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
