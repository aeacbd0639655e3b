"""Ticket Scanner: photograph receipts, review the extracted lines, keep them in Supabase."""

__version__ = "0.1.0"
