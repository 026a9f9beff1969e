# app/data/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.utils.settings import DATABASE_URL

Base = declarative_base()


def make_engine(url: str) -> Engine:
    kwargs = {}
    is_sqlite = url.startswith("sqlite")

    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        #in-memory baza zyje tylko w jednym polaczeniu
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(url, **kwargs)

    if is_sqlite:
        #sqlite domyslnie ignoruje klucze obce (cascade/restrict)
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = make_engine(DATABASE_URL or "sqlite://")
SessionLocal = sessionmaker(bind=engine, autoflush=False)


def init_db(bind: Engine | None = None) -> None:
    # modele musza byc zaimportowane przed create_all
    import app.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
