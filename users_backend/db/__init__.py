"""
Database helpers for the users backend.
"""

from users_backend.db.supabase import (
    SupabaseConfigError,
    SupabaseSettings,
    create_supabase_client,
    get_supabase_settings,
)

__all__ = [
    "SupabaseConfigError",
    "SupabaseSettings",
    "create_supabase_client",
    "get_supabase_settings",
]
