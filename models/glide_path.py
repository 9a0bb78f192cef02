from extensions import db
from datetime import datetime, timezone


class GlidePathWaypoint(db.Model):
    """User-edited allocation target for a calendar year."""
    __tablename__ = 'glide_path_waypoints'

    id = db.Column(db.Integer, primary_key=True)
    year = db.Column(db.Integer, nullable=False, unique=True)
    equity_pct = db.Column(db.Numeric(5, 2), nullable=False)
    fixed_income_pct = db.Column(db.Numeric(5, 2), nullable=False)
    cash_pct = db.Column(db.Numeric(5, 2), nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), onupdate=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    def __repr__(self):
        return f'<GlidePathWaypoint {self.year}: {self.equity_pct}/{self.fixed_income_pct}/{self.cash_pct}>'
