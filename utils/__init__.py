"""Team app helpers: Supabase access, auth session, filters and formatting."""
