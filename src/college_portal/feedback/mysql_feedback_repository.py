from __future__ import annotations

from typing import Sequence

from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Feedback
from .repository import FeedbackRepository

DUPLICATE_FEEDBACK_MESSAGE = "Feedback already submitted for this subject"


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def submitted_subjects(self, student_key: str, academic_year: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT subject FROM feedback WHERE student_key=%s AND academic_year=%s ORDER BY submitted_at ASC",
                (student_key, academic_year),
            )
            return [r["subject"] for r in fetchall(cur)]

    def create(self, feedback: Feedback) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO feedback(student_key, subject, faculty, semester, academic_year, submitted_at)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        feedback.student_key,
                        feedback.subject,
                        feedback.faculty,
                        feedback.semester,
                        feedback.academic_year,
                        feedback.submitted_at,
                    ),
                )
                feedback_id = int(cur.lastrowid)
                cur.executemany(
                    "INSERT INTO feedback_responses(feedback_id, question_id, rating) VALUES(%s,%s,%s)",
                    [(feedback_id, r.question_id, r.rating) for r in feedback.responses],
                )
                return feedback_id
        except mysql_errors.IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ConflictError(DUPLICATE_FEEDBACK_MESSAGE) from e
            raise
