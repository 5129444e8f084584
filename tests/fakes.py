"""
In-memory stand-in for the parts of the Supabase client the services use.

It mirrors the client call shapes (table query builder, storage buckets,
auth and auth.admin) closely enough that services run unchanged against it.
"""
import io
import itertools
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from PIL import Image

INT_ID_TABLES = {"cases", "reviews", "permissions"}
BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]], count: Optional[int] = None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.count_method = None
        self.payload: Any = None
        self.filters = []
        self.order_by = None
        self.start = None
        self.end = None
        self.max_rows = None

    # operations

    def select(self, *columns, count=None):
        self.op = "select"
        self.columns = ",".join(columns) if columns else "*"
        self.count_method = count
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    # modifiers

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def range(self, start, end):
        self.start, self.end = start, end
        return self

    def limit(self, size):
        self.max_rows = size
        return self

    # execution

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def _project(self, row):
        if self.columns.strip() == "*":
            return dict(row)
        names = [c.strip() for c in self.columns.split(",") if c.strip()]
        return {name: row.get(name) for name in names}

    def execute(self):
        self.db.calls.append((self.table, self.op))
        failure = self.db.failures.get((self.table, self.op))
        if failure:
            raise Exception(failure)

        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            payload = self.payload if isinstance(self.payload, list) else [self.payload]
            created = [self.db.new_row(self.table, item) for item in payload]
            rows.extend(created)
            return FakeResponse([dict(r) for r in created])

        matched = [r for r in rows if self._matches(r)]
        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(r) for r in matched])
        if self.op == "delete":
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return FakeResponse([dict(r) for r in matched])

        total = len(matched)
        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: r.get(column), reverse=desc)
        if self.start is not None:
            matched = matched[self.start:self.end + 1]
        if self.max_rows is not None:
            matched = matched[:self.max_rows]
        count = total if self.count_method else None
        return FakeResponse([self._project(r) for r in matched], count)


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.storage.fail_uploads:
            raise Exception("storage unavailable")
        self.storage.objects[(self.name, path)] = (file, file_options or {})
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://project.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.objects: Dict[tuple, tuple] = {}
        self.fail_uploads = False

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeAuthApiError(Exception):
    """Shape of the auth client's API error: message plus HTTP status and error code."""

    def __init__(self, message, status, code=None):
        super().__init__(message)
        self.status = status
        self.code = code


class FakeAdmin:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth
        self.list_calls = []

    def create_user(self, attributes):
        if any(u.email == attributes["email"] for u in self.auth.users.values()):
            raise Exception("A user with this email address has already been registered")
        user = self.auth.new_user(attributes["email"], attributes.get("user_metadata") or {})
        self.auth.passwords[user.email] = attributes.get("password")
        return SimpleNamespace(user=user)

    def list_users(self, page=None, per_page=None):
        self.list_calls.append((page, per_page))
        users = list(self.auth.users.values())
        per_page = per_page or 50
        start = ((page or 1) - 1) * per_page
        return users[start:start + per_page]

    def get_user_by_id(self, uid):
        if uid not in self.auth.users:
            raise FakeAuthApiError("User not found", 404, "user_not_found")
        return SimpleNamespace(user=self.auth.users[uid])

    def update_user_by_id(self, uid, attributes):
        user = self.get_user_by_id(uid).user
        if "email" in attributes:
            self.auth.passwords[attributes["email"]] = self.auth.passwords.pop(user.email, None)
            user.email = attributes["email"]
        if "password" in attributes:
            self.auth.passwords[user.email] = attributes["password"]
        return SimpleNamespace(user=user)

    def delete_user(self, uid, should_soft_delete=False):
        self.get_user_by_id(uid)
        del self.auth.users[uid]
        self.auth.tokens = {t: u for t, u in self.auth.tokens.items() if u != uid}


class FakeAuth:
    def __init__(self, clock):
        self.users: Dict[str, SimpleNamespace] = {}
        self.tokens: Dict[str, str] = {}
        self.passwords: Dict[str, str] = {}
        self.signed_out = 0
        self.clock = clock
        self.admin = FakeAdmin(self)

    def new_user(self, email, user_metadata=None):
        created = self.clock()
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata=user_metadata or {},
            app_metadata={},
            created_at=created,
            updated_at=None,
        )
        self.users[user.id] = user
        return user

    def get_user(self, jwt=None):
        user_id = self.tokens.get(jwt)
        if user_id is None or user_id not in self.users:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.users[user_id])

    def sign_in_with_password(self, credentials):
        user = next((u for u in self.users.values() if u.email == credentials["email"]), None)
        if user is None or self.passwords.get(user.email) != credentials["password"]:
            raise Exception("Invalid login credentials")
        token = f"token-{uuid.uuid4().hex}"
        self.tokens[token] = user.id
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token=token))

    def sign_out(self):
        self.signed_out += 1


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict[tuple, str] = {}
        self.calls: List[tuple] = []
        self._ids = itertools.count(1)
        self._ticks = itertools.count(0)
        self.storage = FakeStorage()
        self.auth = FakeAuth(self.next_timestamp)

    def next_timestamp(self) -> datetime:
        return BASE_TIME + timedelta(minutes=next(self._ticks))

    def table(self, name):
        return FakeQuery(self, name)

    def fail(self, table, op, message="backend exploded"):
        self.failures[(table, op)] = message

    def new_row(self, table, values):
        row = dict(values)
        if "id" not in row:
            row["id"] = next(self._ids) if table in INT_ID_TABLES else str(uuid.uuid4())
        row.setdefault("created_at", self.next_timestamp().isoformat())
        return row

    def add_member(self, email, role="editor", name="Member", password="password1"):
        """Seed an auth user with members and permissions rows; returns (user, token)."""
        user = self.auth.new_user(email)
        self.auth.passwords[email] = password
        self.tables.setdefault("members", []).append({"id": user.id, "name": name})
        self.tables.setdefault("permissions", []).append(self.new_row("permissions", {"member_id": user.id, "role": role}))
        token = f"token-{uuid.uuid4().hex}"
        self.auth.tokens[token] = user.id
        return user, token

    def backend_calls(self, table=None):
        return [c for c in self.calls if table is None or c[0] == table]


def make_image(width: int = 1600, height: int = 900, fmt: str = "PNG", color=(200, 40, 40)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()
