"""
Database access layer for the Ticket Scanner app.

The datastore is a hosted Supabase project. Two tables are used:
- ticket:      id, establishment, purchase_date, created_at
- ticket_line: id, ticket_id, product, units, unit_price

DO NOT define table schemas or migrations here.
"""

from .client import get_supabase_client, reset_supabase_client

__all__ = ["get_supabase_client", "reset_supabase_client"]
