#!/usr/bin/env python
"""
on-the-gpu [--gl] [--log PATH] <command …>

Example:
    on-the-gpu glxgears                     # pvkrun glxgears
    on-the-gpu --primus foo --bar           # primusrun foo --bar
    on-the-gpu --log ~/games/logs/runs.log -- %command%   # Steam launch options
"""
from __future__ import annotations

import logging
import sys
from typing import List, Optional

import typer

from . import config, runlog
from .errors import ConfigError, LogWriteError, OnTheGpuError
from .invocation import Strategy
from .launcher import Launcher

log = logging.getLogger("on_the_gpu")

app = typer.Typer(add_completion=False, help="Run a program on the (discrete) GPU.")


def _setup_logging(quiet: bool) -> None:
    level = "WARNING" if quiet else config.LOG_LEVEL
    logging.basicConfig(level=level, format=config.LOG_FORMAT)
    log.setLevel(level)


def _resolve_strategy(gl: bool, gpu: Optional[str]) -> Strategy:
    if gpu is None:
        return Strategy.GL if gl else Strategy.parse(config.default_strategy())
    chosen = Strategy.parse(gpu)
    if gl and chosen is not Strategy.GL:
        raise ConfigError(f"--gl/--primus conflicts with --gpu {gpu}")
    return chosen


@app.command(context_settings={"allow_interspersed_args": False})
def launch(
    command: Optional[List[str]] = typer.Argument(
        None, metavar="COMMAND [ARGS]...", help="Program to run, with its arguments"
    ),
    gl: bool = typer.Option(
        False, "--gl", "--primus", help="Force OpenGL via primusrun instead of Vulkan via pvkrun"
    ),
    gpu: Optional[str] = typer.Option(None, "--gpu", help="Strategy by name: vulkan or gl"),
    log_path: Optional[str] = typer.Option(
        None, "--log", help="Append one line per run to this file [env: ON_THE_GPU_LOG]"
    ),
    cwd: Optional[str] = typer.Option(None, "--cwd", help="Working directory for the program"),
    last_run: Optional[str] = typer.Option(
        None, "--last-run", help="Overwrite this file with our arguments [env: ON_THE_GPU_LAST_RUN]"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the run banner"),
) -> None:
    """Prefix COMMAND with a GPU-forcing wrapper and run it."""
    _setup_logging(quiet)
    target = list(command or [])

    breadcrumb = last_run or config.last_run_path()
    if breadcrumb:
        try:
            runlog.write_last_run(breadcrumb, sys.argv, target)
        except LogWriteError as exc:
            log.warning("%s", exc)

    try:
        strategy = _resolve_strategy(gl, gpu)
        code = Launcher().run(strategy, target, cwd, log_path or config.default_log_path())
    except OnTheGpuError as exc:
        typer.echo(f"on-the-gpu: {exc}", err=True)
        raise typer.Exit(exc.exit_code)
    raise typer.Exit(code)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
