import uvicorn

from artapi.api.app import create_app
from artapi.config.settings import Settings
from artapi.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> build app -> serve until SIGINT/SIGTERM."""
    settings = Settings()
    Log.configure(settings.log_level)
    app = create_app(settings)

    Log.info("Server starting", port=settings.port, env=settings.app_env)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.keep_alive_timeout_seconds,
        log_level=settings.log_level.lower(),
    )
    Log.info("Server exited")


if __name__ == "__main__":
    main()
