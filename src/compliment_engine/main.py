"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn compliment_engine.main:app --reload

    # Installed console script
    compliment-engine
"""

from compliment_engine.factory import create_app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    from compliment_engine.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "compliment_engine.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
