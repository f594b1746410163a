import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ...domain.models import Contact, User
from ...domain.ports.persistence import DuplicateKeyError, PersistenceGateway


class SQLitePersistence(PersistenceGateway):
    """SQLite-backed implementation of the persistence gateway."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._initialize()

    def _initialize(self) -> None:
        with self._conn:
            self._conn.executescript(
                """
                PRAGMA foreign_keys = ON;

                CREATE TABLE IF NOT EXISTS users (
                    username TEXT PRIMARY KEY,
                    password_hash TEXT NOT NULL,
                    name TEXT NOT NULL,
                    token TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_users_token ON users(token);

                CREATE TABLE IF NOT EXISTS contacts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    username TEXT NOT NULL,
                    first_name TEXT NOT NULL,
                    last_name TEXT,
                    email TEXT,
                    phone TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY(username) REFERENCES users(username)
                );

                CREATE INDEX IF NOT EXISTS idx_contacts_username ON contacts(username);
                """
            )

    def close(self) -> None:
        self._conn.close()

    # UserRepository API ----------------------------------------------------
    def find_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            cur = self._conn.execute("SELECT * FROM users WHERE username = ?", (username,))
            row = cur.fetchone()
        return self._row_to_user(row) if row else None

    def find_user_by_token(self, token: str) -> Optional[User]:
        with self._lock:
            cur = self._conn.execute("SELECT * FROM users WHERE token = ?", (token,))
            row = cur.fetchone()
        return self._row_to_user(row) if row else None

    def count_users_by_username(self, username: str) -> int:
        with self._lock:
            cur = self._conn.execute(
                "SELECT COUNT(*) AS total FROM users WHERE username = ?", (username,)
            )
            row = cur.fetchone()
        return int(row["total"])

    def create_user(self, username: str, password_hash: str, name: str) -> User:
        now = self._now()
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    """
                    INSERT INTO users (username, password_hash, name, token, created_at, updated_at)
                    VALUES (?, ?, ?, NULL, ?, ?)
                    """,
                    (username, password_hash, name, now, now),
                )
                cur = self._conn.execute("SELECT * FROM users WHERE username = ?", (username,))
                row = cur.fetchone()
        except sqlite3.IntegrityError as exc:
            raise DuplicateKeyError(f"User {username} already exists.") from exc
        if not row:
            raise RuntimeError("Failed to persist user.")
        return self._row_to_user(row)

    def update_user(
        self,
        username: str,
        *,
        name: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> User:
        updates = []
        params: List[Any] = []
        if name is not None:
            updates.append("name = ?")
            params.append(name)
        if password_hash is not None:
            updates.append("password_hash = ?")
            params.append(password_hash)

        if updates:
            updates.append("updated_at = ?")
            params.append(self._now())
            params.append(username)
            statement = f"UPDATE users SET {', '.join(updates)} WHERE username = ?"
            with self._lock, self._conn:
                self._conn.execute(statement, params)
        return self._require_user(username)

    def set_user_token(self, username: str, token: Optional[str]) -> User:
        with self._lock, self._conn:
            self._conn.execute(
                "UPDATE users SET token = ?, updated_at = ? WHERE username = ?",
                (token, self._now(), username),
            )
        return self._require_user(username)

    # ContactRepository API -------------------------------------------------
    def create_contact(
        self,
        username: str,
        first_name: str,
        last_name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
    ) -> Contact:
        now = self._now()
        with self._lock, self._conn:
            cur = self._conn.execute(
                """
                INSERT INTO contacts (
                    username, first_name, last_name, email, phone, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (username, first_name, last_name, email, phone, now, now),
            )
            contact_id = cur.lastrowid
            cur = self._conn.execute("SELECT * FROM contacts WHERE id = ?", (contact_id,))
            row = cur.fetchone()
        if not row:
            raise RuntimeError("Failed to persist contact.")
        return self._row_to_contact(row)

    def get_contact(self, username: str, contact_id: int) -> Optional[Contact]:
        with self._lock:
            cur = self._conn.execute(
                "SELECT * FROM contacts WHERE id = ? AND username = ?",
                (contact_id, username),
            )
            row = cur.fetchone()
        return self._row_to_contact(row) if row else None

    def update_contact(
        self,
        username: str,
        contact_id: int,
        first_name: str,
        last_name: Optional[str],
        email: Optional[str],
        phone: Optional[str],
    ) -> Contact:
        with self._lock, self._conn:
            self._conn.execute(
                """
                UPDATE contacts
                SET first_name = ?, last_name = ?, email = ?, phone = ?, updated_at = ?
                WHERE id = ? AND username = ?
                """,
                (first_name, last_name, email, phone, self._now(), contact_id, username),
            )
        contact = self.get_contact(username, contact_id)
        if not contact:
            raise ValueError(f"Contact {contact_id} not found.")
        return contact

    def delete_contact(self, username: str, contact_id: int) -> None:
        with self._lock, self._conn:
            self._conn.execute(
                "DELETE FROM contacts WHERE id = ? AND username = ?",
                (contact_id, username),
            )

    def search_contacts(
        self,
        username: str,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        limit: int,
        offset: int,
    ) -> Tuple[List[Contact], int]:
        where = ["username = ?"]
        params: List[Any] = [username]
        if name:
            where.append(
                "(first_name LIKE ? ESCAPE '\\' OR last_name LIKE ? ESCAPE '\\')"
            )
            params.extend([self._contains(name), self._contains(name)])
        if email:
            where.append("email LIKE ? ESCAPE '\\'")
            params.append(self._contains(email))
        if phone:
            where.append("phone LIKE ? ESCAPE '\\'")
            params.append(self._contains(phone))
        clause = " AND ".join(where)
        with self._lock:
            cur = self._conn.execute(
                f"SELECT * FROM contacts WHERE {clause} ORDER BY id ASC LIMIT ? OFFSET ?",
                [*params, limit, offset],
            )
            rows = cur.fetchall()
            cur = self._conn.execute(f"SELECT COUNT(*) AS total FROM contacts WHERE {clause}", params)
            total = int(cur.fetchone()["total"])
        return [self._row_to_contact(row) for row in rows], total

    # Helpers ----------------------------------------------------------------
    def _require_user(self, username: str) -> User:
        user = self.find_user_by_username(username)
        if not user:
            raise ValueError(f"User {username} not found.")
        return user

    @staticmethod
    def _contains(term: str) -> str:
        escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return f"%{escaped}%"

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _parse_datetime(value: str) -> datetime:
        result = datetime.fromisoformat(value)
        if result.tzinfo is None:
            return result.replace(tzinfo=timezone.utc)
        return result.astimezone(timezone.utc)

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            username=row["username"],
            password_hash=row["password_hash"],
            name=row["name"],
            token=row["token"],
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )

    def _row_to_contact(self, row: sqlite3.Row) -> Contact:
        return Contact(
            id=row["id"],
            username=row["username"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            phone=row["phone"],
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )
