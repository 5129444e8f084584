# Supabase tables: notes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

notes:
- id: uuid (primary key, default: gen_random_uuid())
- desc: text (not null)
- request_id: uuid (foreign key to requests.id, not null, on delete cascade)
- creator_id: uuid (foreign key to auth.users.id, not null)
- created_at: timestamp (default: now())

Notes are append-only annotations: there is no update operation.
"""
