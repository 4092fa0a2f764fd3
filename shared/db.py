import os

from dotenv import load_dotenv
from supabase import Client, create_client

load_dotenv()

# One client per process; every store call resolves through it
_client: Client | None = None


def get_supabase_client() -> Client:
    """Get the shared Supabase client for the events database."""
    global _client

    if _client is None:
        url: str | None = os.getenv("SUPABASE_URL")
        key: str | None = os.getenv("SUPABASE_SERVICE_KEY")

        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")

        _client = create_client(url, key)

    return _client


def resolve_client(supabase: Client | None = None) -> Client:
    """Return the given client, or the shared one built from the environment."""
    return supabase if supabase is not None else get_supabase_client()
