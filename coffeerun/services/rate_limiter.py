"""Per-identity throttle for credit application submissions.

Counters live in the ``submission_counters`` table keyed by a SHA-256 digest
of the applicant's normalized email and name, so no personal data is stored
in the limiter. Increments are a single upsert statement, which makes the
read-increment-write atomic at the database. The caller runs ``hit()`` in
the same transaction as the insert it is guarding and rolls back when the
returned count is over the limit.
"""

import hashlib
from datetime import timedelta
from flask import current_app
from sqlalchemy import case, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from coffeerun.exceptions import RateLimitExceededError
from coffeerun.extensions import db
from coffeerun.models import SubmissionCounter
from coffeerun.utils.dates import utcnow

UPSERT_DIALECTS = {
    'sqlite': sqlite_insert,
    'postgresql': pg_insert,
}


class SubmissionRateLimiter:
    """At most ``limit`` accepted submissions per identity per rolling ``window``."""

    def __init__(self, limit=3, window=timedelta(hours=1), clock=utcnow):
        self.limit = limit
        self.window = window
        self.clock = clock

    @classmethod
    def from_config(cls):
        return cls(
            limit=current_app.config['CREDIT_SUBMISSION_LIMIT'],
            window=current_app.config['CREDIT_SUBMISSION_WINDOW'],
        )

    @staticmethod
    def identity_key(email, first_name, last_name):
        parts = [str(value or '').strip().lower() for value in (email, first_name, last_name)]
        return hashlib.sha256('\x1f'.join(parts).encode('utf-8')).hexdigest()

    def current_count(self, key):
        """Unexpired count for ``key``; a missing or expired counter is 0."""
        count = db.session.execute(
            select(SubmissionCounter.count).where(
                SubmissionCounter.key == key,
                SubmissionCounter.expires_at > self.clock(),
            )
        ).scalar_one_or_none()
        return count or 0

    def is_blocked(self, key):
        return self.current_count(key) >= self.limit

    def check(self, key):
        """Raise RateLimitExceededError when ``key`` has used up its window."""
        if self.is_blocked(key):
            raise RateLimitExceededError()

    def hit(self, key):
        """Atomically count one accepted submission and reset the expiry.

        Returns the new count. Does not commit.
        """
        now = self.clock()
        expires_at = now + self.window
        next_count = case(
            (SubmissionCounter.expires_at > now, SubmissionCounter.count + 1),
            else_=1,
        )

        insert = UPSERT_DIALECTS.get(db.engine.dialect.name)
        if insert is not None:
            stmt = insert(SubmissionCounter).values(key=key, count=1, expires_at=expires_at)
            stmt = stmt.on_conflict_do_update(
                index_elements=[SubmissionCounter.key],
                set_={'count': next_count, 'expires_at': expires_at},
            )
            db.session.execute(stmt)
        else:
            result = db.session.execute(
                update(SubmissionCounter)
                .where(SubmissionCounter.key == key)
                .values(count=next_count, expires_at=expires_at)
            )
            if result.rowcount == 0:
                db.session.add(SubmissionCounter(key=key, count=1, expires_at=expires_at))
                db.session.flush()

        return db.session.execute(
            select(SubmissionCounter.count).where(SubmissionCounter.key == key)
        ).scalar_one()

    def register(self, key):
        """hit() and raise when the new count goes past the limit."""
        count = self.hit(key)
        if count > self.limit:
            raise RateLimitExceededError()
        return count
