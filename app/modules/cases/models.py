# Supabase tables: cases
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

cases:
- id: bigint (primary key, identity)
- company_name: text (not null)
- desc: text (not null, max 250 chars)
- city: text (not null)
- country: text (not null)
- contact_person: text (not null)
- form_type: text (not null, default: 'normal') - values: normal, beforeAfter
- image: text (nullable) - public URL, used when form_type = normal
- image_before: text (nullable) - public URL, used when form_type = beforeAfter
- image_after: text (nullable) - public URL, used when form_type = beforeAfter
- creator_id: uuid (foreign key to auth.users.id, not null)
- created_at: timestamp (default: now())

Storage bucket: case-images (public)
- objects at case-images/<creator_id>/<random>.webp
"""
