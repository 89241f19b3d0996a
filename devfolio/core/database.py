import os
import threading
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text
from sqlalchemy.orm import DeclarativeBase
from .config import Config


class Base(DeclarativeBase):
    pass


db = SQLAlchemy(model_class=Base)


class Database:
    # Guards create_all when several apps initialise in the same process
    _lock = threading.Lock()

    # Dialects with INSERT ... ON CONFLICT support in SQLAlchemy
    UPSERT_DIALECTS = ('postgresql', 'sqlite')

    @staticmethod
    def init_app(app):
        """Bind Flask-SQLAlchemy to the app and create any missing tables."""
        app.config.setdefault('SQLALCHEMY_DATABASE_URI', app.config.get('DATABASE_URL') or Config.DATABASE_URL)
        app.config.setdefault('SQLALCHEMY_TRACK_MODIFICATIONS', False)

        uri = app.config['SQLALCHEMY_DATABASE_URI']
        if uri.startswith('sqlite:///') and not uri.startswith('sqlite:///:memory:'):
            db_dir = os.path.dirname(uri[len('sqlite:///'):])
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)

        db.init_app(app)

        with Database._lock:
            with app.app_context():
                db.create_all()

    @staticmethod
    def dialect_name():
        return db.session.get_bind().dialect.name

    @staticmethod
    def insert(model):
        """
        Return a dialect-specific INSERT construct for ``model`` that supports
        ``on_conflict_do_update`` / ``on_conflict_do_nothing``.
        """
        name = Database.dialect_name()
        if name == 'postgresql':
            from sqlalchemy.dialects.postgresql import insert
        elif name == 'sqlite':
            from sqlalchemy.dialects.sqlite import insert
        else:
            raise RuntimeError(
                f"Atomic upserts are not supported on '{name}'; "
                f"use one of {', '.join(Database.UPSERT_DIALECTS)}"
            )
        return insert(model)

    @staticmethod
    def ping():
        """
        Run a trivial query against the database.
        Returns (ok, detail).
        """
        try:
            db.session.execute(text('SELECT 1'))
            return True, Database.dialect_name()
        except Exception as e:
            db.session.rollback()
            return False, str(e)
