# Supabase tables: requests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

requests:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- mobile: text (not null) - Danish number, 8 digits with optional +45
- mail: text (not null)
- category: text (not null) - one of TASK_CATEGORIES
- consent: boolean (not null) - storage consent from the offer form
- message: text (nullable, max 200 chars)
- address: text (nullable)
- city: text (nullable)
- created_at: timestamp (default: now())

Rows are inserted anonymously by the public offer form (RLS insert policy
for the anon role); select/update/delete are restricted to members.
"""
