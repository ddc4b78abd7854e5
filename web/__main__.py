"""
Web 진입점

실행 방법:
    python -m web
    python -m web --port 8080
"""

import argparse

import uvicorn

from core.config.loader import get_settings
from core.constants import Defaults


def main() -> None:
    parser = argparse.ArgumentParser(description="Trading journal web API")
    parser.add_argument("--host", default=Defaults.WEB_HOST)
    parser.add_argument("--port", type=int, default=Defaults.WEB_PORT)
    args = parser.parse_args()

    uvicorn.run(
        "web.app:app",
        host=args.host,
        port=args.port,
        log_level=get_settings().log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
