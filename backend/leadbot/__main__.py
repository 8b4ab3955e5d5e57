"""Arranca el webhook con uvicorn (`python -m leadbot`)."""

import uvicorn

from leadbot.core.config import settings


def main() -> None:
    uvicorn.run("leadbot.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
