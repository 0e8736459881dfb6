# main.py
from __future__ import annotations

import logging
import sys

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.models import Permission, Role
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.path import database_url
from infra.services import ServiceGraph, build_service_graph

logger = logging.getLogger(__name__)


def build_services(db_url: str | None = None) -> ServiceGraph:
    url = db_url or database_url()
    run_migrations(url)
    engine = create_engine(url, future=True)
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    return build_service_graph(session)


def permission_matrix(graph: ServiceGraph) -> list[str]:
    roles = list(Role)
    width = max(len(p.value) for p in Permission)
    lines = [" ".join([" " * width] + [role.value.ljust(7) for role in roles])]
    for permission in Permission:
        marks = [
            ("yes" if graph.evaluator.has_permission(role, permission) else "-").ljust(7)
            for role in roles
        ]
        lines.append(" ".join([permission.value.ljust(width)] + marks))
    return lines


def main() -> int:
    setup_logging()
    graph = build_services()
    try:
        for line in permission_matrix(graph):
            print(line)
    finally:
        graph.session.close()
    logger.info("Access policy loaded for roles: %s", ", ".join(r.value for r in Role))
    return 0


if __name__ == "__main__":
    sys.exit(main())
