from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Admin
from .repository import AdminRepository


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_username(self, username: str) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT admin_id, username, name, password_hash FROM admins WHERE username=%s", (username,))
            r = fetchone(cur)
            if not r:
                return None
            return Admin(
                admin_id=int(r["admin_id"]),
                username=r["username"],
                name=r["name"],
                password_hash=r["password_hash"],
            )

    def upsert(self, admin: Admin) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO admins(username, name, password_hash)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), password_hash=VALUES(password_hash)
                """,
                (admin.username, admin.name, admin.password_hash),
            )
