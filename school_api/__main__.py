"""Run the API with uvicorn on the configured host/port (default 3000)."""

import uvicorn

from school_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "school_api.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
