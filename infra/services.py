from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.auth import AuthService, PermissionEvaluator, RolePolicy
from core.services.auth.policy import DEFAULT_ROLE_POLICY
from core.services.auth.session import UserSessionContext
from infra.db.auth import SqlAlchemyUserRepository


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    user_session: UserSessionContext
    evaluator: PermissionEvaluator
    auth_service: AuthService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "user_session": self.user_session,
            "evaluator": self.evaluator,
            "auth_service": self.auth_service,
        }


def build_service_graph(
    session: Session,
    *,
    policy: RolePolicy = DEFAULT_ROLE_POLICY,
    bootstrap: bool = True,
) -> ServiceGraph:
    user_session = UserSessionContext()
    evaluator = PermissionEvaluator(policy)
    user_repo = SqlAlchemyUserRepository(session)

    auth_service = AuthService(
        session=session,
        user_repo=user_repo,
        evaluator=evaluator,
        user_session=user_session,
    )
    if bootstrap:
        auth_service.bootstrap_defaults()

    return ServiceGraph(
        session=session,
        user_session=user_session,
        evaluator=evaluator,
        auth_service=auth_service,
    )


def build_service_dict(session: Session, **kwargs: Any) -> dict[str, Any]:
    return build_service_graph(session, **kwargs).as_dict()
