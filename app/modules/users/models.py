# Supabase tables: members, permissions, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

members:
- id: uuid (primary key, references auth.users.id)
- name: text (not null)
- created_at: timestamp (default: now())

permissions:
- id: bigint (primary key, identity)
- member_id: uuid (foreign key to members.id, unique, not null)
- role: text (not null) - values: editor, admin
- created_at: timestamp (default: now())

Note: credentials (email, password) live in auth.users managed by Supabase
Auth and are only changed through the admin API with the service role key.
These tables mirror the display name and role.
"""
