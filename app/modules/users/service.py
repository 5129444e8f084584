import logging
from datetime import datetime, timezone
from supabase import Client
from app.core.errors import BackendOperationError, NotFoundError
from app.core.pagination import Page, page_bounds
from app.modules.users.schemas import MemberCreate, MemberUpdate, MemberResponse
from fastapi import HTTPException
from typing import Dict, List, Any

logger = logging.getLogger(__name__)

AUTH_PAGE_SIZE = 100


def _is_user_not_found(error: Exception) -> bool:
    """Auth admin API error for an unknown user id (GoTrue answers 404 / user_not_found)."""
    return getattr(error, "status", None) == 404 or getattr(error, "code", None) == "user_not_found"


class UserService:
    """Member management through the Supabase Auth admin API plus the members/permissions tables."""

    def __init__(self, supabase: Client, auth_page_size: int = AUTH_PAGE_SIZE):
        self.supabase = supabase
        self.auth_page_size = auth_page_size

    def _roles_and_names(self, user_ids: List[str]) -> tuple:
        if not user_ids:
            return {}, {}
        permissions = self.supabase.table("permissions")\
            .select("member_id, role")\
            .in_("member_id", user_ids)\
            .execute()
        members = self.supabase.table("members")\
            .select("id, name")\
            .in_("id", user_ids)\
            .execute()
        roles = {p["member_id"]: p.get("role") for p in permissions.data or []}
        names = {m["id"]: m.get("name") for m in members.data or []}
        return roles, names

    @staticmethod
    def _to_response(user: Any, roles: Dict[str, str], names: Dict[str, str]) -> MemberResponse:
        return MemberResponse(
            id=user.id,
            email=user.email,
            name=names.get(user.id),
            role=roles.get(user.id),
            created_at=user.created_at,
        )

    def create_member(self, member_data: MemberCreate) -> MemberResponse:
        """Create auth user, then its members and permissions rows"""
        try:
            auth_response = self.supabase.auth.admin.create_user({
                "email": member_data.email,
                "password": member_data.password,
                "email_confirm": True,
                "app_metadata": {"role": member_data.role},
            })
        except Exception as e:
            logger.error(f"Failed to create user: {str(e)}")
            raise BackendOperationError(f"Failed to create user: {str(e)}")
        if not auth_response or not auth_response.user:
            raise BackendOperationError("Failed to create user")
        user = auth_response.user
        logger.info(f"User created: {user.id}")

        try:
            self.supabase.table("members")\
                .insert({"id": user.id, "name": member_data.name})\
                .execute()
        except Exception as e:
            logger.error(f"Failed to insert into members: {str(e)}")
            raise BackendOperationError(f"Failed to insert into members: {str(e)}")

        try:
            self.supabase.table("permissions")\
                .insert({"member_id": user.id, "role": member_data.role})\
                .execute()
        except Exception as e:
            logger.error(f"Failed to insert into permissions: {str(e)}")
            raise BackendOperationError(f"Failed to insert into permissions: {str(e)}")

        return MemberResponse(
            id=user.id,
            email=user.email or member_data.email,
            name=member_data.name,
            role=member_data.role,
            created_at=user.created_at,
        )

    def _all_auth_users(self) -> List[Any]:
        """Every auth user; the admin API returns one page per call."""
        users = []
        page = 1
        while True:
            batch = self.supabase.auth.admin.list_users(page=page, per_page=self.auth_page_size) or []
            users.extend(batch)
            if len(batch) < self.auth_page_size:
                return users
            page += 1

    def list_members(self, page: int = 1, limit: int = 6) -> Page[MemberResponse]:
        """All auth users merged with their member name and role, newest first"""
        start, end = page_bounds(page, limit)
        try:
            users = self._all_auth_users()
            users = sorted(
                users,
                key=lambda u: u.created_at or datetime.min.replace(tzinfo=timezone.utc),
                reverse=True,
            )
            window = users[start:end + 1]
            roles, names = self._roles_and_names([u.id for u in window])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch users: {str(e)}")
            raise BackendOperationError(f"Failed to fetch users: {str(e)}")
        return Page[MemberResponse](
            items=[self._to_response(u, roles, names) for u in window],
            total=len(users),
            page=page,
            limit=limit,
        )

    def get_member_by_id(self, user_id: str) -> MemberResponse:
        try:
            response = self.supabase.auth.admin.get_user_by_id(user_id)
        except Exception as e:
            if _is_user_not_found(e):
                raise NotFoundError("User not found")
            logger.error(f"User lookup failed for {user_id}: {str(e)}")
            raise BackendOperationError(f"Failed to fetch user: {str(e)}")
        if not response or not response.user:
            raise NotFoundError("User not found")
        try:
            roles, names = self._roles_and_names([user_id])
        except Exception as e:
            raise BackendOperationError(f"Failed to fetch member details: {str(e)}")
        return self._to_response(response.user, roles, names)

    def update_member(self, user_id: str, member_data: MemberUpdate) -> MemberResponse:
        """Update credentials in auth, name in members and role in permissions"""
        self.get_member_by_id(user_id)

        attributes = {}
        if member_data.email is not None:
            attributes["email"] = member_data.email
        if member_data.password is not None:
            attributes["password"] = member_data.password
        if attributes:
            try:
                self.supabase.auth.admin.update_user_by_id(user_id, attributes)
            except Exception as e:
                raise BackendOperationError(f"Failed to update user in auth: {str(e)}")

        if member_data.name is not None:
            try:
                self.supabase.table("members")\
                    .update({"name": member_data.name})\
                    .eq("id", user_id)\
                    .execute()
            except Exception as e:
                raise BackendOperationError(f"Failed to update user in members: {str(e)}")

        if member_data.role is not None:
            try:
                self.supabase.table("permissions")\
                    .update({"role": member_data.role})\
                    .eq("member_id", user_id)\
                    .execute()
            except Exception as e:
                raise BackendOperationError(f"Failed to update user role: {str(e)}")

        logger.info(f"User {user_id} updated")
        return self.get_member_by_id(user_id)

    def delete_member(self, user_id: str) -> None:
        """Delete auth user, then members and permissions rows"""
        try:
            self.supabase.auth.admin.delete_user(user_id)
        except Exception as e:
            logger.error(f"Failed to delete user from auth: {str(e)}")
            raise BackendOperationError(f"Failed to delete user from auth: {str(e)}")

        try:
            self.supabase.table("members").delete().eq("id", user_id).execute()
        except Exception as e:
            raise BackendOperationError(f"Failed to delete user from members: {str(e)}")

        try:
            self.supabase.table("permissions").delete().eq("member_id", user_id).execute()
        except Exception as e:
            raise BackendOperationError(f"Failed to delete user from permissions: {str(e)}")

        logger.info(f"User {user_id} deleted")
