from __future__ import annotations

import argparse
import os
import platform

import uvicorn


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="translation-bot", description="Radio-t chat translation bot")
    parser.add_argument("--version", action="store_true", help="show version")
    parser.add_argument("--config", default=None, help="JSON configuration file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    from translation_bot.core.settings import APP_VERSION

    if args.version:
        print(f"\tVersion: {APP_VERSION}\n\tPython version: {platform.python_version()}")
        return

    if args.config:
        os.environ["CONFIG_FILE"] = args.config
    elif os.path.exists("config.json"):
        os.environ.setdefault("CONFIG_FILE", "config.json")

    # Import after CONFIG_FILE is set so the app reads it
    from apps.api.main import app, settings  # noqa: WPS433

    # uvicorn handles SIGINT/SIGTERM with a graceful shutdown
    uvicorn.run(app, host=settings.app_host, port=settings.app_port, reload=False, log_config=None)


if __name__ == "__main__":
    main()
