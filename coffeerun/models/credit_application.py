"""Credit application model."""

from coffeerun.extensions import db
from coffeerun.utils.dates import utcnow


class CreditApplication(db.Model):
    """An accepted "apply for credit" submission and its decision."""
    __tablename__ = 'credit_applications'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), nullable=False, index=True)
    re_enter_email = db.Column(db.String(120), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    state = db.Column(db.String(2), nullable=False)
    zip = db.Column(db.String(10), nullable=False)
    gross_income = db.Column(db.Numeric(12, 2), nullable=False)
    ssn_last_four = db.Column(db.String(4), nullable=False)
    apply_for_credit = db.Column(db.Boolean, nullable=False, default=False)

    # Decision
    qualified = db.Column(db.Boolean, nullable=False, default=False)
    credit_limit = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=utcnow)

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'

    def apply_decision(self, qualification):
        """Copy a qualification outcome onto the record."""
        self.qualified = qualification.qualified
        self.credit_limit = qualification.credit_limit

    def __repr__(self):
        return f'<CreditApplication {self.id} qualified={self.qualified}>'
