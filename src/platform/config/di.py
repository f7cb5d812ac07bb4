"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.consultation.app.service.notification_dispatcher import NotificationDispatcher
from src.service.consultation.app.service.slot_allocator import SlotAllocator
from src.service.consultation.driven_adapter.notification.console_email_notifier import (
    ConsoleEmailNotifier,
)
from src.service.consultation.driven_adapter.notification.http_email_notifier import (
    HttpEmailNotifier,
)
from src.service.consultation.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.consultation.driven_adapter.repo.review_query_repo_impl import (
    ReviewQueryRepoImpl,
)
from src.service.consultation.driven_adapter.repo.slot_counter_repo_impl import (
    SlotCounterRepoImpl,
)
from src.service.consultation.driven_adapter.security.admin_gate_impl import (
    SharedSecretAdminGate,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Object(settings)

    # Database (uses AsyncEngineManager, event-loop aware)
    database = providers.Singleton(Database)

    # One transaction per use case call
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Repositories for reads outside a unit of work (stateless - session per call)
    slot_counter_repo = providers.Singleton(
        SlotCounterRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    review_query_repo = providers.Singleton(
        ReviewQueryRepoImpl, session_factory=database.provided.session
    )

    # Admission control
    slot_allocator = providers.Factory(
        SlotAllocator,
        slot_counter_repo=slot_counter_repo,
        max_slots=config_service.provided.MAX_SLOTS_PER_MONTH,
    )

    # Admin gate (single shared secret)
    admin_gate = providers.Singleton(
        SharedSecretAdminGate, admin_secret=config_service.provided.ADMIN_SECRET
    )

    # Outbound email: EMAIL_PROVIDER=console|http
    email_notifier = providers.Selector(
        providers.Callable(lambda config: config.EMAIL_PROVIDER.lower(), config_service),
        console=providers.Singleton(ConsoleEmailNotifier),
        http=providers.Singleton(
            HttpEmailNotifier,
            api_url=config_service.provided.EMAIL_API_URL,
            api_key=config_service.provided.EMAIL_API_KEY,
            sender=config_service.provided.EMAIL_FROM,
        ),
    )
    notification_dispatcher = providers.Factory(
        NotificationDispatcher,
        email_notifier=email_notifier,
        timeout_seconds=config_service.provided.NOTIFICATION_TIMEOUT_SECONDS,
    )


container = Container()


def setup() -> None:
    container.config_service()
    container.database()


def cleanup() -> None:
    container.reset_singletons()
