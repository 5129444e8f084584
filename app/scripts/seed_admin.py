"""
Seed Admin Script
Creates the first admin member (auth user + members + permissions rows).
Run once per environment; later members are created from the admin area.

Usage:
    python -m app.scripts.seed_admin admin@agency.dk 'secret-password' 'Admin Name'
"""

import sys
import logging

from app.database.supabase_client import get_service_supabase
from app.modules.users.schemas import MemberCreate
from app.modules.users.service import UserService
from fastapi import HTTPException

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_admin(email: str, password: str, name: str) -> str:
    service = UserService(get_service_supabase())
    member = service.create_member(MemberCreate(email=email, password=password, name=name, role="admin"))
    logger.info(f"Admin member created: {member.id} ({member.email})")
    return member.id


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 3:
        logger.error("Usage: python -m app.scripts.seed_admin <email> <password> <name>")
        return 2
    try:
        seed_admin(*argv)
    except HTTPException as e:
        logger.error(f"Seeding failed: {e.detail}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
