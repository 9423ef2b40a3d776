"""
resourcekit - Command Line Interface

Two ways to run a resource plugin:

1. Path-based, for the orchestrator. The plugin's ``__main__`` calls
   :func:`run`, which dispatches on the name the executable was invoked
   under (``/opt/resource/check``, ``/opt/resource/in``,
   ``/opt/resource/out``) or installs those links:

       if __name__ == "__main__":
           run(MyResource())

       $ my-resource install

2. Subcommand-based, for humans and local testing. :func:`create_app`
   builds a Typer application with one subcommand per flow:

       $ my-resource check < request.json
       $ my-resource in ./target < request.json
       $ my-resource out ./sources < request.json
       $ my-resource install --binary ./my-resource
       $ my-resource info

Failures print one error line on stderr and exit with status 1.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence

import typer

from resourcekit import __version__
from resourcekit.cli.output import print_error, print_info, print_success, print_table
from resourcekit.config.settings import settings
from resourcekit.dispatch import INSTALL_COMMAND, Dispatcher
from resourcekit.errors import ResourceError
from resourcekit.plugins.capabilities import ResourceType
from resourcekit.plugins.sdk import Verb

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING") -> None:
    """Send log records to stderr at *level*."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("resourcekit").setLevel(level)


def _as_resource(impl: Any) -> ResourceType[Any, Any, Any, Any]:
    if isinstance(impl, ResourceType):
        return impl
    return ResourceType(impl)


def run(
    impl: Any,
    argv: Optional[Sequence[str]] = None,
    *,
    install_root: Optional[str] = None,
) -> None:
    """Process entry point for a resource plugin.

    Args:
        impl: A ResourceType, or a plugin object to build one from.
        argv: Invocation arguments; defaults to ``sys.argv``.
        install_root: Override for ``RESOURCEKIT_INSTALL_ROOT``.

    Raises:
        SystemExit: With status 1 when the invocation fails.
    """
    configure_logging(settings.RESOURCEKIT_LOG_LEVEL)
    resource = _as_resource(impl)
    args = list(argv) if argv else list(sys.argv)

    try:
        Dispatcher(resource, install_root=install_root).run(*args)
    except ResourceError as exc:
        logger.debug("Invocation %s failed in phase %s", args, exc.phase, exc_info=True)
        print_error(str(exc), phase=exc.phase)
        raise SystemExit(1) from exc


@contextmanager
def _reported() -> Iterator[None]:
    try:
        yield
    except ResourceError as exc:
        logger.debug("Command failed in phase %s", exc.phase, exc_info=True)
        print_error(str(exc), phase=exc.phase)
        raise typer.Exit(1)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"resourcekit version {__version__}")
        raise typer.Exit()


def verbose_callback(value: bool) -> None:
    """Set verbose mode."""
    if value:
        configure_logging("DEBUG")


def create_app(
    impl: Any,
    *,
    name: str = "resourcekit",
    install_root: Optional[str] = None,
) -> typer.Typer:
    """Build a Typer application exposing the flows as subcommands.

    Args:
        impl: A ResourceType, or a plugin object to build one from.
        name: Program name shown in help output.
        install_root: Override for ``RESOURCEKIT_INSTALL_ROOT``.
    """
    resource = _as_resource(impl)
    dispatcher = Dispatcher(resource, install_root=install_root)

    app = typer.Typer(
        name=name,
        help="Run a resource plugin's check/in/out flows or install its entry points.",
        no_args_is_help=True,
        add_completion=False,
        pretty_exceptions_enable=False,
    )

    @app.callback()
    def main(
        version: bool = typer.Option(
            False,
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            callback=verbose_callback,
            help="Enable debug logging on stderr.",
        ),
    ) -> None:
        """
        Resource plugin runtime.

        Each verb reads one JSON request on stdin and writes one JSON
        response on stdout.
        """

    @app.command("check")
    def check_cmd() -> None:
        """Discover versions: CheckRequest in, list of versions out."""
        with _reported():
            dispatcher.run_check()

    @app.command("in")
    def in_cmd(
        target: Path = typer.Argument(..., help="Directory to fetch the version into."),
    ) -> None:
        """Fetch a version: GetRequest in, Response out."""
        with _reported():
            dispatcher.run_get(str(target))

    @app.command("out")
    def out_cmd(
        source_dir: Path = typer.Argument(..., help="Directory holding the build's inputs."),
    ) -> None:
        """Publish a version: PutRequest in, Response out."""
        with _reported():
            dispatcher.run_put(str(source_dir))

    @app.command("install")
    def install_cmd(
        binary: Optional[Path] = typer.Option(
            None,
            "--binary",
            "-b",
            help="Executable to link to. Defaults to the running program.",
        ),
    ) -> None:
        """Link the implemented entry points to the plugin executable."""
        with _reported():
            binary_path = dispatcher.resolve_binary(str(binary) if binary else sys.argv[0])
            links = dispatcher.installer.install(binary_path, [binary_path, INSTALL_COMMAND])

        for link in links:
            print_info(f"{link} -> {binary_path}")
        print_success(f"Installed {len(links)} entry point(s) under {dispatcher.install_root}")

    @app.command("info")
    def info_cmd() -> None:
        """Show which verbs are implemented and where they are installed."""
        rows = [
            [
                verb.value,
                verb.capability,
                dispatcher.entry_point(verb),
                "yes" if resource.implements(verb) else "no",
            ]
            for verb in Verb
        ]
        print_table(
            "Entry points",
            ["Verb", "Capability", "Entry point", "Implemented"],
            rows,
            styles=["cyan", None, None, None],
        )

    return app


__all__ = [
    "configure_logging",
    "create_app",
    "run",
]
