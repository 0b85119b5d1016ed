"""
Main module entry point.

Runs the API server: python -m questlogic.main
"""

import uvicorn

from questlogic.main.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "questlogic.main.app:app",
        host=settings.service.host,
        port=settings.service.port,
        reload=settings.service.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
