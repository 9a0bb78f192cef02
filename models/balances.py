from extensions import db
from datetime import datetime, timezone


class BalanceSnapshot(db.Model):
    """A dated account balance. Create/delete only; delete and re-add to correct."""
    __tablename__ = 'balance_snapshots'

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False)
    balance = db.Column(db.Numeric(12, 2), nullable=False)
    note = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    def __repr__(self):
        return f'<BalanceSnapshot {self.account_id} {self.date}: ${self.balance}>'
