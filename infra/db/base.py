# infra/db/base.py
from __future__ import annotations
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
import logging

from infra.path import database_url

logger = logging.getLogger(__name__)

Base = declarative_base()

# PM_DATABASE_URL wins; otherwise a SQLite file in the per-user data dir
db_url = database_url()
logger.info("Using database at: %s", make_url(db_url).render_as_string(hide_password=True))

engine = create_engine(
    db_url,
    echo=False,
    future=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
