import argparse
import os
import sys

import anyio
import uvicorn

from app.core.config import settings
from app.core.logger import setup_logger

COMMANDS = ("server", "migrate", "seed")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=settings.app_description,
        epilog="Commands can be combined, e.g. `migrate seed`.",
    )
    parser.add_argument(
        "commands",
        nargs="*",
        metavar="command",
        help=f"one or more of: {', '.join(COMMANDS)} (default: server)",
    )

    args = parser.parse_args(argv)
    unknown = [command for command in args.commands if command not in COMMANDS]
    if unknown:
        parser.error(f"unknown command: {', '.join(unknown)}")

    args.commands = args.commands or ["server"]
    return args


async def run_database_commands(commands: list[str]) -> None:
    from app.core.db import engine
    from app.core.seed import migrate, seed_users

    try:
        if "migrate" in commands:
            await migrate()
        if "seed" in commands:
            await seed_users()
    finally:
        await engine.dispose()


def run_server():
    is_linux = sys.platform.startswith("linux")

    if settings.debug:
        os.environ["PYTHONASYNCIODEBUG"] = "1"
        uvicorn.run(
            app="app.main:app",
            host=settings.backend_host,
            port=settings.backend_port,
            reload=settings.reload_uvicorn,
            workers=settings.workers_count,
        )
    elif is_linux:
        from app.web import GunicornApplication

        GunicornApplication().run()
    else:
        uvicorn.run(
            app="app.main:app",
            host=settings.backend_host,
            port=settings.backend_port,
            reload=settings.reload_uvicorn,
            workers=settings.workers_count,
        )


def main(argv: list[str] | None = None):
    commands = parse_args(argv).commands
    database_commands = [command for command in commands if command != "server"]

    if database_commands:
        setup_logger()
        anyio.run(run_database_commands, database_commands)

    if "server" in commands:
        run_server()


if __name__ == "__main__":
    main()
