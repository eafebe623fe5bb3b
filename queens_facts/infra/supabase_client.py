import logging

from supabase import create_client, Client
from queens_facts.core.config import Settings, settings as default_settings
from queens_facts.core.errors import ConfigError

logger = logging.getLogger("queens_facts.infra")


def get_supabase(config: Settings | None = None) -> Client:
    """
    Build the Supabase client owned by the application.

    - service role key is preferred (needed for audit inserts)
    - anon key is accepted outside production, read-only in practice
    """
    config = config or default_settings

    if not config.SUPABASE_URL:
        raise ConfigError("Missing SUPABASE_URL")

    key = config.SUPABASE_SERVICE_ROLE_KEY
    if not key:
        if config.is_production or not config.SUPABASE_ANON_KEY:
            raise ConfigError("Missing SUPABASE_SERVICE_ROLE_KEY")
        logger.warning("SUPABASE_SERVICE_ROLE_KEY not set, falling back to SUPABASE_ANON_KEY")
        key = config.SUPABASE_ANON_KEY

    return create_client(config.SUPABASE_URL, key)
