import os
from pathlib import Path

# Keep module-level engines off the real database during tests.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import func, select

from cashbook.database import create_db_engine, create_session_factory, init_database
from cashbook.models import Category


@pytest.fixture()
def engine():
    engine = create_db_engine("sqlite://")
    init_database(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture()
def count_rows(session_factory):
    def _count(model) -> int:
        with session_factory() as session:
            return session.scalar(select(func.count()).select_from(model))

    return _count


@pytest.fixture()
def category_titles(session_factory):
    def _titles() -> list[str]:
        with session_factory() as session:
            return list(session.scalars(select(Category.title).order_by(Category.id)))

    return _titles


@pytest.fixture()
def write_csv(tmp_path: Path):
    def _write(rows: list[str], name: str = "transactions.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(rows) + "\n", encoding="utf-8")
        return path

    return _write
