"""Run the career guide chat page: ``python -m careerguide``."""

import argparse
import sys

from . import CareerGuide
from .agent import CareerAgent
from .config import AVAILABLE_MODELS, Settings, configure_logging
from .llm import from_settings


def main(argv=None):
    parser = argparse.ArgumentParser(description="AURORA career guide chat")
    parser.add_argument("--name", help="display name used in the greeting")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8050)
    parser.add_argument("--debug", action="store_true")
    parser.add_argument(
        "--list-models",
        action="store_true",
        help="print suggested models for the configured provider and exit",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="send a test request to the configured provider and exit",
    )
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if args.list_models:
        for model in AVAILABLE_MODELS.get(settings.provider, ()):
            marker = "*" if model == settings.model else " "
            print(f"{marker} {model}")
        return 0

    if args.check:
        ok, message = from_settings(settings).check_connection()
        status = "OK" if ok else "FAILED"
        print(f"{status} [{settings.provider} / {settings.model}]: {message}")
        return 0 if ok else 1

    app = CareerGuide(agent=CareerAgent(settings=settings), display_name=args.name)
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
