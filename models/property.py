from extensions import db
from datetime import datetime, timezone


class Property(db.Model):
    """A housing asset with its outstanding mortgage"""
    __tablename__ = 'properties'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    estimated_value = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    mortgage_balance = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    mortgage_rate = db.Column(db.Numeric(5, 2), nullable=True)  # annual %, None if no mortgage

    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), onupdate=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    def __repr__(self):
        return f'<Property {self.name}>'

    @property
    def equity(self):
        """Estimated value less the outstanding mortgage"""
        return (self.estimated_value or 0) - (self.mortgage_balance or 0)

    @property
    def equity_percent(self):
        """Equity as a percentage of estimated value"""
        if not self.estimated_value:
            return 0
        return (self.equity / self.estimated_value) * 100
