"""Server entry point"""

import uvicorn

from twitch_relay.app import create_app
from twitch_relay.core.config import get_settings


def run() -> None:
    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
