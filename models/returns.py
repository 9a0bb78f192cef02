from extensions import db
from datetime import datetime, timezone


class ReturnEntry(db.Model):
    """Annual return for an account; one row per (account, year)."""
    __tablename__ = 'return_entries'
    __table_args__ = (
        db.UniqueConstraint('account_id', 'year', name='uq_return_account_year'),
    )

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(db.Integer, db.ForeignKey('accounts.id'), nullable=False, index=True)
    year = db.Column(db.Integer, nullable=False)
    return_percent = db.Column(db.Numeric(7, 2), nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    def __repr__(self):
        return f'<ReturnEntry {self.account_id} {self.year}: {self.return_percent}%>'
