"""
Shared users backend library code.

This package holds code reused by the FastAPI app in `api/`: configuration,
the Supabase client factory, domain models, and data access.

App entrypoints (FastAPI routers) should live outside this package and
import from `users_backend` rather than the other way around.
"""
