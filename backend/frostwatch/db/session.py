from sqlmodel import Session, SQLModel, create_engine

from frostwatch.core.config import settings
import frostwatch.models  # noqa: F401  registers tables on SQLModel.metadata


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.database_url),
)


def init_db() -> None:
    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
