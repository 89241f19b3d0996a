from sqlalchemy import func
from devfolio.core import db, Config

# The aggregate counters live in exactly one row with this primary key
SINGLETON_ID = 1

# Counters are INTEGER columns on every backend
MAX_COUNTER = 2**31 - 1

COUNTER_FIELDS = {
    'totalViews': 'total_views',
    'projectClicks': 'project_clicks',
    'contactInquiries': 'contact_inquiries',
    'previousMonthViews': 'previous_month_views',
    'previousMonthClicks': 'previous_month_clicks',
    'previousMonthInquiries': 'previous_month_inquiries',
}


def _counter():
    return db.Column(db.Integer, nullable=False, default=0, server_default='0')


class Analytics(db.Model):
    __tablename__ = Config.ANALYTICS_TABLE

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    total_views = _counter()
    project_clicks = _counter()
    contact_inquiries = _counter()
    # Snapshot values supplied by the dashboard, never touched by increments
    previous_month_views = _counter()
    previous_month_clicks = _counter()
    previous_month_inquiries = _counter()
    updated_at = db.Column(db.DateTime, nullable=False, server_default=func.now())

    def to_dict(self):
        d = {'id': self.id}
        for key, column in COUNTER_FIELDS.items():
            d[key] = getattr(self, column)
        d['updatedAt'] = self.updated_at.isoformat() if self.updated_at else None
        return d


class DailyView(db.Model):
    __tablename__ = Config.DAILY_VIEWS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    # YYYY-MM-DD
    date = db.Column(db.String(10), nullable=False, unique=True)
    views = db.Column(db.Integer, nullable=False, default=0, server_default='0')
    created_at = db.Column(db.DateTime, nullable=False, server_default=func.now())

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date,
            'views': self.views,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
