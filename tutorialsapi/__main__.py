"""Serve the API with uvicorn: ``python -m tutorialsapi``."""

import uvicorn

from tutorialsapi.core.config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "tutorialsapi.api:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
