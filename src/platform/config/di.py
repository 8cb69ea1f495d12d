"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.event_booking.app.command.sweep_lifecycle_use_case import SweepLifecycleUseCase
from src.service.event_booking.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from src.service.event_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.event_booking.driven_adapter.repo.category_repo_impl import CategoryRepoImpl
from src.service.event_booking.driven_adapter.repo.event_command_repo_impl import (
    EventCommandRepoImpl,
)
from src.service.event_booking.driven_adapter.repo.event_query_repo_impl import (
    EventQueryRepoImpl,
)
from src.service.event_booking.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.event_booking.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.event_booking.driven_adapter.repo.venue_repo_impl import VenueRepoImpl
from src.service.event_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.event_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager, one short-lived session per repository call)
    database = providers.Singleton(Database)

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth)

    # Repositories (stateless - use session_factory per call)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl,
        session_factory=database.provided.session,
        password_hasher=password_hasher,
    )
    venue_repo = providers.Singleton(VenueRepoImpl, session_factory=database.provided.session)
    category_repo = providers.Singleton(
        CategoryRepoImpl, session_factory=database.provided.session
    )
    event_command_repo = providers.Singleton(
        EventCommandRepoImpl, session_factory=database.provided.session
    )
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    booking_command_repo = providers.Singleton(
        BookingCommandRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )

    # Lifecycle sweep, run before reads and by the background loop in main.py
    lifecycle_sweeper = providers.Singleton(
        SweepLifecycleUseCase,
        event_command_repo=event_command_repo,
        booking_command_repo=booking_command_repo,
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
