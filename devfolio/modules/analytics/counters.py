"""
Analytics counters.

Three public events are counted: page views, project clicks and contact
inquiries. Page views are also bucketed per UTC calendar date in the
daily_views ledger.

Every increment is a single ``INSERT ... ON CONFLICT DO UPDATE SET
col = col + 1`` statement, so the row is created on first use and
concurrent increments never overwrite each other.
"""

from datetime import datetime, timezone
from sqlalchemy import select, func
from devfolio.core import db, Database
from .models import Analytics, DailyView, SINGLETON_ID

DEFAULT_DAYS = 7
MAX_DAYS = 365


class CounterService:
    """Increment and read the analytics singleton and the daily ledger"""

    @staticmethod
    def today():
        """Ledger key for the current UTC date"""
        return datetime.now(timezone.utc).date().isoformat()

    @classmethod
    def _bump_singleton(cls, column):
        table = Analytics.__table__
        stmt = Database.insert(Analytics).values(id=SINGLETON_ID, **{column: 1})
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.id],
            set_={column: table.c[column] + 1, 'updated_at': func.now()},
        )
        db.session.execute(stmt)

    @classmethod
    def _bump_daily(cls, date_key):
        table = DailyView.__table__
        stmt = Database.insert(DailyView).values(date=date_key, views=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.date],
            set_={'views': table.c.views + 1},
        )
        db.session.execute(stmt)

    @classmethod
    def _load_singleton(cls):
        # populate_existing: the upsert bypassed the identity map
        return db.session.get(Analytics, SINGLETON_ID, populate_existing=True)

    @classmethod
    def _increment(cls, column):
        try:
            cls._bump_singleton(column)
            analytics = cls._load_singleton()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return analytics

    @classmethod
    def increment_view(cls):
        """Count one page view on the aggregate and on today's ledger row"""
        try:
            cls._bump_singleton('total_views')
            cls._bump_daily(cls.today())
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    @classmethod
    def increment_project_click(cls):
        """Count one project click and return the updated singleton"""
        return cls._increment('project_clicks')

    @classmethod
    def increment_contact_inquiry(cls):
        """Count one contact inquiry and return the updated singleton"""
        return cls._increment('contact_inquiries')

    @classmethod
    def get_analytics(cls):
        """Return the singleton, creating a zeroed row on first access"""
        analytics = cls._load_singleton()
        if analytics is not None:
            return analytics

        table = Analytics.__table__
        try:
            db.session.execute(
                Database.insert(Analytics)
                .values(id=SINGLETON_ID)
                .on_conflict_do_nothing(index_elements=[table.c.id])
            )
            analytics = cls._load_singleton()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return analytics

    @classmethod
    def update_analytics(cls, values):
        """
        Overwrite the given counter columns (snake_case keys) and leave the
        rest untouched. A missing row is created with the remaining columns at 0.
        """
        table = Analytics.__table__
        stmt = Database.insert(Analytics).values(id=SINGLETON_ID, **values)
        set_ = {column: stmt.excluded[column] for column in values}
        set_['updated_at'] = func.now()
        stmt = stmt.on_conflict_do_update(index_elements=[table.c.id], set_=set_)

        try:
            db.session.execute(stmt)
            analytics = cls._load_singleton()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return analytics

    @classmethod
    def get_daily_views(cls, days=DEFAULT_DAYS):
        """The most recent ``days`` ledger rows, oldest first"""
        rows = db.session.execute(
            select(DailyView).order_by(DailyView.date.desc()).limit(days)
        ).scalars().all()
        return list(reversed(rows))

    @staticmethod
    def parse_days(raw):
        """Query-string ``days``: missing, invalid or < 1 means 7; capped at 365"""
        try:
            days = int(raw)
        except (TypeError, ValueError):
            return DEFAULT_DAYS
        if days < 1:
            return DEFAULT_DAYS
        return min(days, MAX_DAYS)
