"""Logfire setup for the comment store.

Persistence outcomes (loads, saves, discarded snapshots) and no-op intents are
reported as structured logfire events; the database backend is additionally
traced query by query.
"""

import logfire
from sqlalchemy.ext.asyncio import AsyncEngine

import canopy
from canopy.config import ObservabilitySettings, Settings


def should_send_to_logfire(observability: ObservabilitySettings) -> bool:
    """Decide whether telemetry leaves the process.

    An explicit ``send_to_logfire`` wins; otherwise having a token is enough.
    """
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the process.

    Set OBSERVABILITY__LOGFIRE_TOKEN to ship telemetry to Logfire cloud, or
    OBSERVABILITY__SEND_TO_LOGFIRE=false to keep it on the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send_to_logfire(settings.observability)

    logfire.configure(
        service_name="canopy",
        service_version=canopy.__version__,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="indented",
            include_timestamps=False,
            verbose=settings.debug,
            min_log_level="debug" if settings.debug else "info",
        ),
    )

    logfire.debug(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every statement the SQL snapshot storage issues.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.debug("SQLAlchemy instrumented", url=engine.url.render_as_string())
