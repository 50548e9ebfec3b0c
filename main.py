"""
main.py
-------
Walks one user and one comment through their whole lifecycle against the
configured PostgreSQL database:

    create (forced natural key) -> fetch -> update -> fetch_all -> destroy

Usage:
    python main.py
"""

from datetime import datetime

from db.connection import connection
from db.init_db import create_tables
from models.comment import Comment
from models.user import User
from orm import FailureKind
from utils.logger import get_logger

logger = get_logger(__name__)


def run(conn) -> None:
    """Run the demo on an open connection."""
    # ── New user ──────────────────────────────────────────
    user = User(
        username="jdoe",
        fullName="John Doe",
        password="ksdiKoDkjP20XC?B8XNSVBOZ",
        email="jdoe@domain.com",
    )
    # The username is chosen here, so the insert must be forced.
    created = user.save(conn, force_create=True)
    if not created and created.kind is not FailureKind.CONSTRAINT_VIOLATION:
        logger.error(f"Could not create {user.name()}: {created.failure}")
        return

    # ── Existing user ─────────────────────────────────────
    fetched = User.fetch_one(conn, "jdoe")
    if not fetched:
        logger.error(f"User jdoe not found: {fetched.failure}")
        return
    user = fetched.unwrap()
    user["email"] = "another@email.com"
    user.save(conn)
    logger.info(f"User: {user.to_json()}")

    # ── Comments ──────────────────────────────────────────
    comment = Comment(
        author=user.key,
        content="First!",
        article=1,
        createdAt=datetime.now().isoformat(timespec="seconds"),
    )
    comment.save(conn)
    logger.info(f"Comment #{comment.key} saved")

    comments = Comment.fetch_all(conn, "author = :author", {"author": user.key})
    for c in comments.unwrap_or([]):
        logger.info(f"Comment: {c.to_json()}")

    # ── Cleanup ───────────────────────────────────────────
    comment.destroy(conn)
    if user.destroy(conn):
        logger.info(f"User {user['fullName']} removed, state={user.state.value}")


def main() -> None:
    with connection() as conn:
        create_tables(conn)
        run(conn)


if __name__ == "__main__":
    main()
