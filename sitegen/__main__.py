# sitegen/__main__.py
import argparse
import logging

import uvicorn

from .config import Settings
from .main import create_app


def parse_cli_args():
    """Parses command-line arguments."""
    parser = argparse.ArgumentParser(description="Relay server between a frontend and an Ollama model")
    parser.add_argument("--host", type=str, default=None, help="Host address to run the server on")
    parser.add_argument("--port", type=int, default=None, help="Port to run the server on")
    parser.add_argument("--model", type=str, default=None, help="Ollama model identifier")
    return parser.parse_args()


def main():
    cli_args = parse_cli_args()
    settings = Settings.from_env()
    overrides = {
        key: value
        for key, value in (("host", cli_args.host), ("port", cli_args.port), ("model", cli_args.model))
        if value is not None
    }
    if overrides:
        settings = settings.model_copy(update=overrides)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
