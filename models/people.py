from extensions import db
from datetime import datetime, timezone


DEFAULT_CLAIM_AGE = 65
DEFAULT_OAS_RESIDENCE_YEARS = 40


class Person(db.Model):
    """A household member; owns accounts and income sources."""
    __tablename__ = 'people'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    birth_year = db.Column(db.Integer, nullable=True)

    # Government pension inputs (None means use the defaults above)
    pension_claim_age = db.Column(db.Integer, nullable=True)
    oas_residence_years = db.Column(db.Integer, nullable=True)

    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    # Relationships
    accounts = db.relationship('Account', back_populates='owner', lazy=True,
                               cascade='all, delete-orphan')
    income_sources = db.relationship('IncomeSource', back_populates='owner', lazy=True,
                                     cascade='all, delete-orphan')

    @property
    def effective_claim_age(self):
        return self.pension_claim_age if self.pension_claim_age is not None else DEFAULT_CLAIM_AGE

    @property
    def effective_residence_years(self):
        if self.oas_residence_years is not None:
            return self.oas_residence_years
        return DEFAULT_OAS_RESIDENCE_YEARS

    def __repr__(self):
        return f'<Person {self.name}>'
