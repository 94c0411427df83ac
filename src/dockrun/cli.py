"""
dockrun - run, stop and list containers on a Docker daemon.

Usage:
  dockrun                                            # List running containers
  dockrun -mode run -image docker.io/library/alpine  # Start in background
  dockrun -mode run -image alpine -cmd "echo hi"     # Run a command, print output
  dockrun -mode run -image alpine -- sh -c "echo hi" # Same, with exact tokens
  dockrun -mode stop -id 3f2a9c1d7e4b                # Stop a container

Environment:
  DOCKRUN_DOCKER_BASE_URL, DOCKRUN_DOCKER_STOP_TIMEOUT, DOCKRUN_DOCKER_WAIT_TIMEOUT,
  DOCKRUN_LOG_LEVEL, DOCKRUN_LOG_FORMAT (also read from .env)
"""

import argparse
import asyncio
from typing import List, Optional

import structlog
from rich.console import Console
from rich.markup import escape

from ._version import __version__
from .config import settings
from .models.errors import (
    DaemonConnectionError,
    DockrunException,
    UnknownCommandError,
    ValidationError,
)
from .services.container import ContainerManager, DockerClientFactory
from .utils.containers import split_command
from .utils.logging import setup_logging

logger = structlog.get_logger(__name__)

err_console = Console(stderr=True)

MODE_CONTEXT = {
    "run": "run container",
    "stop": "stop container",
    "list": "list containers",
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dockrun",
        description="Run, stop and list containers through the Docker daemon.",
    )
    parser.add_argument("-mode", "--mode", default="list", help="run, stop, or list")
    parser.add_argument(
        "-image", "--image", default="", help="Container image, e.g. docker.io/library/alpine"
    )
    parser.add_argument(
        "-cmd",
        "--cmd",
        default="",
        help="Command to be run in the container, split on spaces. Optional",
    )
    parser.add_argument("-id", "--id", default="", help="Container ID")
    parser.add_argument(
        "command",
        nargs="*",
        help="Command tokens to run in the container (put them after --)",
    )
    parser.add_argument(
        "--wait-timeout",
        type=float,
        default=None,
        help="Seconds to wait for a command container to exit (0 = no limit)",
    )
    parser.add_argument("--log-level", default=None, help="Override DOCKRUN_LOG_LEVEL")
    parser.add_argument(
        "--log-format", choices=["console", "json"], default=None, help="Override DOCKRUN_LOG_FORMAT"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_command(cmd: str, tokens: Optional[List[str]]) -> Optional[List[str]]:
    """Pick the command to run from either the token list or the -cmd string."""
    if tokens and cmd:
        raise ValidationError("use either -cmd or trailing command tokens, not both")
    if tokens:
        return list(tokens)
    if cmd:
        return split_command(cmd)
    return None


def resolve_wait_timeout(override: Optional[float]) -> Optional[float]:
    if override is None:
        return settings.docker.wait_timeout
    return override if override > 0 else None


async def handle_run_container(
    manager: ContainerManager, image: str, command: Optional[List[str]]
) -> None:
    if not command:
        container_id = await manager.run_background(image)
        logger.info(f"Container {container_id} started")
        return

    output = await manager.run_command(image, command)
    print(output)


async def handle_list_containers(manager: ContainerManager) -> None:
    for container in await manager.list_containers():
        print(container.id)


async def run(args: argparse.Namespace) -> None:
    """Validate the arguments, connect to the daemon and perform one operation."""
    if args.mode not in MODE_CONTEXT:
        raise UnknownCommandError(args.mode)

    if args.mode != "run" and args.command:
        raise ValidationError("command tokens are only accepted in run mode")

    command = None
    if args.mode == "run":
        if not args.image:
            raise ValidationError("image not provided")
        command = resolve_command(args.cmd, args.command)

    docker_config = settings.docker
    with DockerClientFactory(docker_config.base_url, docker_config.timeout) as client:
        manager = ContainerManager(
            client,
            stop_timeout=docker_config.stop_timeout,
            wait_timeout=resolve_wait_timeout(args.wait_timeout),
        )

        if args.mode == "run":
            await handle_run_container(manager, args.image, command)
        elif args.mode == "stop":
            await manager.stop_container(args.id)
        else:
            await handle_list_containers(manager)


def error_message(error: DockrunException, mode: str) -> str:
    """Prefix an error with what the CLI was doing when it happened."""
    if isinstance(error, DaemonConnectionError):
        return error.context("new API")
    if isinstance(error, UnknownCommandError):
        return error.message
    return error.context(MODE_CONTEXT[mode])


def main(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_format)

    try:
        asyncio.run(run(args))
    except DockrunException as e:
        err_console.print(f"[red]Error:[/red] {escape(error_message(e, args.mode))}")
        return e.exit_code

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
