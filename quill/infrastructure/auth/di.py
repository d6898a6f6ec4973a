"""DI provider for auth infrastructure."""

from dishka import provide

from quill.domain.auth.port.repository import UserRepository
from quill.domain.auth.port.role_graph import RoleGraphRepository
from quill.infrastructure.persistence.repository.role_graph import PostgresRoleGraphRepository
from quill.infrastructure.persistence.repository.user import PostgresUserRepository
from quill.util.di.base import Provider
from quill.util.di.scope import Scope


class AuthInfraProvider(Provider):
    """DI provider for auth infrastructure adapters."""

    user_repo = provide(
        PostgresUserRepository,
        scope=Scope.UOW,
        provides=UserRepository,
    )
    role_graph_repo = provide(
        PostgresRoleGraphRepository,
        scope=Scope.UOW,
        provides=RoleGraphRepository,
    )
