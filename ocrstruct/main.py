"""Application entry point for the structuring API server."""

import uvicorn

from ocrstruct.api.app import app
from ocrstruct.utils.config import load_config
from ocrstruct.utils.logger import setup_logging


def main() -> None:
    """Start the FastAPI application server."""
    config = load_config()
    setup_logging(config.log_level)
    uvicorn.run(app, host=config.api.host, port=config.api.port)


if __name__ == "__main__":
    main()
