# Supabase tables: reviews
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

reviews:
- id: bigint (primary key, identity)
- name: text (not null) - reviewer name
- city: text (not null)
- desc: text (not null, max 100 chars)
- rate: smallint (not null, 1-5)
- creator: uuid (foreign key to auth.users.id, not null)
- created_at: timestamp (default: now())
"""
