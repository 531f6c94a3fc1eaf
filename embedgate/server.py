"""
Server startup script.
"""

import uvicorn

from embedgate.core.config import get_settings
from embedgate.main import create_app
from embedgate.shared.supervisor import UncaughtFailureGuard


def main() -> None:
    """Start the FastAPI service under uvicorn."""
    settings = get_settings()

    with UncaughtFailureGuard(debug=settings.debug):
        app = create_app(settings)
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )


if __name__ == "__main__":
    main()
