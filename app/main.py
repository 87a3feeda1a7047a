from fastapi import FastAPI

from app.api.routes import agent, health, people, reports
from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.db.session import init_db_for_startup


def create_app() -> FastAPI:
    """
    Application factory for the MeetingFlow service.
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Backend service that estimates the cost of calendar meetings from\n"
            "normalized events and per-attendee roles, aggregates it into a\n"
            "day-bucketed spend summary and derives executive-style insights."
        ),
        version="0.1.0",
    )

    # Routers
    app.include_router(health.router)
    app.include_router(agent.router)
    app.include_router(people.router)
    app.include_router(reports.router)

    @app.on_event("startup")
    async def on_startup() -> None:  # pragma: no cover
        await init_db_for_startup()

    return app


app = create_app()
