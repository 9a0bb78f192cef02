from extensions import db
from datetime import datetime, timezone


class AccountType:
    """Registered and non-registered account kinds."""
    TFSA = 'TFSA'
    RRSP = 'RRSP'
    RRIF = 'RRIF'
    REGULAR_SAVINGS = 'REGULAR_SAVINGS'
    CHEQUING = 'CHEQUING'

    LABELS = {
        TFSA: 'TFSA',
        RRSP: 'RRSP',
        RRIF: 'RRIF',
        REGULAR_SAVINGS: 'Regular Savings',
        CHEQUING: 'Chequing',
    }

    # Cash-like accounts don't track annual returns
    NO_RETURNS = frozenset({REGULAR_SAVINGS, CHEQUING})

    @classmethod
    def choices(cls):
        return list(cls.LABELS.items())


class Account(db.Model):
    __tablename__ = 'accounts'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    account_type = db.Column(db.String(30), nullable=False)
    owner_id = db.Column(db.Integer, db.ForeignKey('people.id'), nullable=False, index=True)

    # Target allocation; all three NULL until configured
    equity_pct = db.Column(db.Numeric(5, 2), nullable=True)
    fixed_income_pct = db.Column(db.Numeric(5, 2), nullable=True)
    cash_pct = db.Column(db.Numeric(5, 2), nullable=True)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), onupdate=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    # Relationships
    owner = db.relationship('Person', back_populates='accounts')
    snapshots = db.relationship('BalanceSnapshot', backref='account', lazy=True,
                                cascade='all, delete-orphan',
                                order_by='[BalanceSnapshot.date.desc(), BalanceSnapshot.id.desc()]')
    returns = db.relationship('ReturnEntry', backref='account', lazy=True,
                              cascade='all, delete-orphan',
                              order_by='ReturnEntry.year.desc()')

    @property
    def type_label(self):
        return AccountType.LABELS.get(self.account_type, self.account_type)

    @property
    def tracks_returns(self):
        return self.account_type not in AccountType.NO_RETURNS

    @property
    def has_allocation(self):
        return self.equity_pct is not None

    @property
    def latest_snapshot(self):
        """Snapshot with the most recent date ("current balance")."""
        return self.snapshots[0] if self.snapshots else None

    @property
    def latest_return(self):
        return self.returns[0] if self.returns else None

    def __repr__(self):
        return f'<Account {self.name}>'
