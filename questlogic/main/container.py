"""
Dependency container injection module - Main Layer

Composition root wiring settings, the Mongo client, the event repository
and the use cases together.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from questlogic.application.use_cases.health_use_cases import GetHealthStatusUseCase
from questlogic.application.use_cases.prediction_use_cases import (
    ComputePredictionUseCase,
    GetAllPredictionsUseCase,
    GetPredictionEventUseCase,
    GetResponseCurveUseCase,
    GetUserPredictionsUseCase,
    RecordOutcomeUseCase,
    SubmitPredictionUseCase,
)
from questlogic.infrastructure.database import MongoDatabase
from questlogic.infrastructure.repositories.prediction_event_repository import (
    PredictionEventRepository,
)
from questlogic.infrastructure.services.health_check_service import (
    HealthCheckService,
)
from questlogic.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
        events_collection=config.database.collection_name,
    )

    prediction_event_repository = providers.Singleton(
        PredictionEventRepository,
        database=mongo_database,
        collection_name=config.database.collection_name,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
    )

    # Application (use cases)
    compute_prediction_use_case = providers.Factory(
        ComputePredictionUseCase,
        default_beta=config.scoring.default_beta,
    )

    get_response_curve_use_case = providers.Factory(GetResponseCurveUseCase)

    submit_prediction_use_case = providers.Factory(
        SubmitPredictionUseCase,
        prediction_event_repository=prediction_event_repository,
    )

    record_outcome_use_case = providers.Factory(
        RecordOutcomeUseCase,
        prediction_event_repository=prediction_event_repository,
    )

    get_prediction_event_use_case = providers.Factory(
        GetPredictionEventUseCase,
        prediction_event_repository=prediction_event_repository,
    )

    get_user_predictions_use_case = providers.Factory(
        GetUserPredictionsUseCase,
        prediction_event_repository=prediction_event_repository,
    )

    get_all_predictions_use_case = providers.Factory(
        GetAllPredictionsUseCase,
        prediction_event_repository=prediction_event_repository,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
        version=config.service.version,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Manage external resources for the lifetime of the FastAPI app.

    Indexes are ensured at startup and the Mongo client is closed on
    shutdown.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_indexes")
        await mongo_database.create_indexes()
        logger.info("container.resources.initialized")
        yield container
    finally:
        logger.info("container.mongo.close")
        mongo_database.close()
        logger.info("container.resources.shutdown")
