from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import UserAccount


class UserRepository(ABC):
    @abstractmethod
    def add(self, user: UserAccount) -> None: ...

    @abstractmethod
    def update(self, user: UserAccount) -> None: ...

    @abstractmethod
    def delete(self, user_id: str) -> None: ...

    @abstractmethod
    def get(self, user_id: str) -> Optional[UserAccount]: ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[UserAccount]: ...

    @abstractmethod
    def list_all(self) -> List[UserAccount]: ...


__all__ = ["UserRepository"]
