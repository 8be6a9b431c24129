"""Rate limiter counter model."""

from coffeerun.extensions import db


class SubmissionCounter(db.Model):
    """Accepted-submission count for one hashed identity, with expiry."""
    __tablename__ = 'submission_counters'

    key = db.Column(db.String(64), primary_key=True)
    count = db.Column(db.Integer, nullable=False, default=0)
    expires_at = db.Column(db.DateTime, nullable=False)

    def __repr__(self):
        return f'<SubmissionCounter {self.key[:8]} count={self.count}>'
