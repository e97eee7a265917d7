from .supabase_client import (
    SupabaseClient,
    get_supabase_client,
    get_supabase,
    get_supabase_admin,
    get_supabase_session,
)

__all__ = [
    "SupabaseClient",
    "get_supabase_client",
    "get_supabase",
    "get_supabase_admin",
    "get_supabase_session",
]
