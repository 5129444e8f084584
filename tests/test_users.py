import pytest

from app.core.errors import BackendOperationError, NotFoundError
from app.modules.users.schemas import MemberCreate, MemberUpdate
from app.modules.users.service import UserService
from app.scripts.seed_admin import main as seed_admin_main

NEW_MEMBER = {"email": "sofie@agency.dk", "password": "hemmelig1", "name": "Sofie", "role": "editor"}


@pytest.fixture
def service(fake_supabase):
    return UserService(fake_supabase)


def test_create_member_writes_auth_members_and_permissions(service, fake_supabase):
    member = service.create_member(MemberCreate(**NEW_MEMBER))

    assert member.role == "editor"
    assert fake_supabase.auth.passwords["sofie@agency.dk"] == "hemmelig1"
    assert {"id": member.id, "name": "Sofie"} in [
        {k: row[k] for k in ("id", "name")} for row in fake_supabase.tables["members"]
    ]
    assert any(p["member_id"] == member.id and p["role"] == "editor" for p in fake_supabase.tables["permissions"])


def test_duplicate_email_is_a_backend_error(service):
    service.create_member(MemberCreate(**NEW_MEMBER))
    with pytest.raises(BackendOperationError) as exc:
        service.create_member(MemberCreate(**NEW_MEMBER))
    assert "already been registered" in exc.value.detail


def test_members_listed_newest_first(service):
    for i in range(3):
        service.create_member(MemberCreate(**{**NEW_MEMBER, "email": f"m{i}@agency.dk", "name": f"M{i}"}))
    page = service.list_members(page=1, limit=2)
    assert page.total == 3
    assert [m.name for m in page.items] == ["M2", "M1"]


def test_update_member_name_role_and_password(service, fake_supabase):
    member = service.create_member(MemberCreate(**NEW_MEMBER))
    updated = service.update_member(member.id, MemberUpdate(name="Sofie K", role="admin", password="nyt-kodeord"))

    assert updated.name == "Sofie K"
    assert updated.role == "admin"
    assert fake_supabase.auth.passwords["sofie@agency.dk"] == "nyt-kodeord"


def test_delete_member_removes_rows(service, fake_supabase):
    member = service.create_member(MemberCreate(**NEW_MEMBER))
    service.delete_member(member.id)

    with pytest.raises(NotFoundError):
        service.get_member_by_id(member.id)
    assert all(p["member_id"] != member.id for p in fake_supabase.tables["permissions"])


def test_routes_are_admin_only(client, editor):
    _, headers = editor
    response = client.get("/api/v1/users", headers=headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Insufficient permissions. Required role: admin"


def test_admin_member_lifecycle(client, admin):
    _, headers = admin
    created = client.post("/api/v1/users", json=NEW_MEMBER, headers=headers)
    assert created.status_code == 201
    member_id = created.json()["id"]
    assert "password" not in created.json()

    listed = client.get("/api/v1/users", headers=headers).json()
    assert listed["total"] == 2

    response = client.put(f"/api/v1/users/{member_id}", json={"role": "admin"}, headers=headers)
    assert response.json()["role"] == "admin"

    assert client.delete(f"/api/v1/users/{member_id}", headers=headers).status_code == 204
    assert client.get(f"/api/v1/users/{member_id}", headers=headers).status_code == 404


def test_admin_cannot_delete_self(client, admin):
    user, headers = admin
    response = client.delete(f"/api/v1/users/{user.id}", headers=headers)
    assert response.status_code == 403


def test_short_password_rejected(client, admin):
    _, headers = admin
    response = client.post("/api/v1/users", json={**NEW_MEMBER, "password": "abc"}, headers=headers)
    assert response.status_code == 422


def test_seed_admin_script(monkeypatch, fake_supabase):
    monkeypatch.setattr("app.scripts.seed_admin.get_service_supabase", lambda: fake_supabase)

    assert seed_admin_main(["boss@agency.dk", "supersecret", "Boss"]) == 0
    assert fake_supabase.tables["permissions"][0]["role"] == "admin"
    assert seed_admin_main(["boss@agency.dk", "supersecret", "Boss"]) == 1
    assert seed_admin_main(["only-email@agency.dk"]) == 2


def test_members_listed_across_auth_pages(fake_supabase):
    service = UserService(fake_supabase, auth_page_size=2)
    for i in range(5):
        service.create_member(MemberCreate(**{**NEW_MEMBER, "email": f"p{i}@agency.dk", "name": f"P{i}"}))

    first = service.list_members(page=1, limit=4)
    second = service.list_members(page=2, limit=4)

    assert first.total == second.total == 5
    assert [m.name for m in first.items + second.items] == ["P4", "P3", "P2", "P1", "P0"]
    assert fake_supabase.auth.admin.list_calls[:3] == [(1, 2), (2, 2), (3, 2)]


def test_unknown_member_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.get_member_by_id("no-such-user")


def test_auth_outage_is_a_backend_error(service, fake_supabase, monkeypatch):
    member = service.create_member(MemberCreate(**NEW_MEMBER))

    def unreachable(uid):
        raise ConnectionError("connection refused")

    monkeypatch.setattr(fake_supabase.auth.admin, "get_user_by_id", unreachable)
    with pytest.raises(BackendOperationError) as exc:
        service.get_member_by_id(member.id)
    assert exc.value.detail == "Failed to fetch user: connection refused"
