from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def make_engine(url: str = "sqlite://", echo: bool = False):
    """
    Create an engine for the registry store.

    In-memory SQLite URLs get a single shared connection; otherwise every new
    connection would see its own empty database.
    """
    if url.startswith("sqlite") and (url == "sqlite://" or ":memory:" in url):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo)


def make_session_factory(engine):
    # rows handed out by the registry are detached and must keep their loaded values
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )
