# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Member login and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate members
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout members
- auth.admin.* - Member management (service role key, see users module)

Members are never self-registered: an admin creates them through the
users module, which also writes the mirrored members/permissions rows.
"""
