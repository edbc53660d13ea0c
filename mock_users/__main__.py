"""Run the mock server: ``python -m mock_users``.

Host and port come from Settings (HOST / PORT environment variables,
defaults 127.0.0.1:4010).
"""

import uvicorn

from mock_users.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "mock_users.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
