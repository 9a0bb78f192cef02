from extensions import db
from datetime import datetime, timezone


class IncomeFrequency:
    ANNUAL = 'ANNUAL'
    MONTHLY = 'MONTHLY'

    LABELS = {
        ANNUAL: 'Annual',
        MONTHLY: 'Monthly',
    }

    @classmethod
    def choices(cls):
        return list(cls.LABELS.items())


class IncomeSource(db.Model):
    __tablename__ = 'income_sources'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)  # Employer, side business, etc.
    owner_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=False, index=True)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    frequency = db.Column(db.String(10), nullable=False, default=IncomeFrequency.ANNUAL)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), onupdate=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    # Relationships
    owner = db.relationship('Person', back_populates='income_sources')

    @property
    def annual_amount(self):
        """Amount normalised to a year"""
        if self.frequency == IncomeFrequency.MONTHLY:
            return self.amount * 12
        return self.amount

    def __repr__(self):
        return f'<IncomeSource {self.name}: ${self.amount} {self.frequency}>'
