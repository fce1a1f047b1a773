"""Main application entry point."""

import os

from eventplanner.config.environment import IS_PRODUCTION_ENVIRONMENT

APP_FACTORY = "eventplanner.api.app:create_application"

if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get('PORT', 8080))
    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - single process with hot-reload
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host="127.0.0.1",
            port=port,
            reload=True,
            log_level="debug"
        )
    else:
        # Production mode - string reference for proper multi-worker support
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host="0.0.0.0",
            port=port,
            reload=False,
            workers=int(os.environ.get('WEB_CONCURRENCY', 2)),
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
