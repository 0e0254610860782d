# on_the_gpu/launcher.py
from __future__ import annotations

import logging
import signal
import subprocess
import threading
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional, Sequence, Union

from . import runlog
from .errors import LaunchError, LogWriteError
from .invocation import Invocation, Strategy, default_wrappers

log = logging.getLogger(__name__)

# Forwarded to the child while we wait. SIGINT is not: the terminal already
# delivers it to the whole foreground process group.
FORWARDED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
)


@contextmanager
def _forward_signals(child: subprocess.Popen) -> Iterator[None]:
    """Relay termination signals to `child`; restore old handlers on exit."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _relay(signum, _frame):
        log.debug("forwarding signal %d to pid %d", signum, child.pid)
        child.send_signal(signum)

    previous = {sig: signal.signal(sig, _relay) for sig in FORWARDED_SIGNALS}
    previous[signal.SIGINT] = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        for sig, handler in previous.items():
            # None: the old handler was not installed from Python
            signal.signal(sig, signal.SIG_DFL if handler is None else handler)


def _exit_status(returncode: int) -> int:
    """Popen reports death-by-signal N as -N; shells say 128 + N."""
    return 128 - returncode if returncode < 0 else returncode


class Launcher:
    """Compose `[wrapper, *command]`, log it, run it, relay the exit code."""

    def __init__(self, wrappers: Optional[Mapping[Strategy, str]] = None):
        self.wrappers = default_wrappers()
        if wrappers:
            self.wrappers.update({Strategy.parse(k): v for k, v in wrappers.items()})

    def run(
        self,
        strategy: Union[Strategy, str, None],
        target_command: Sequence[str],
        working_directory: Optional[str] = None,
        log_path: Optional[str] = None,
    ) -> int:
        inv = Invocation.build(strategy, target_command, working_directory, log_path)
        argv = inv.argv(self.wrappers)

        if inv.log_path:
            try:
                runlog.append_invocation(inv.log_path, inv.working_directory, argv)
            except LogWriteError as exc:
                log.warning("%s (launching anyway)", exc)

        log.info("%s", inv.banner(argv))
        inv.exit_code = self._spawn_and_wait(argv, inv.working_directory)
        return inv.exit_code

    def _spawn_and_wait(self, argv: Sequence[str], cwd: str) -> int:
        try:
            child = subprocess.Popen(list(argv), cwd=cwd)
        except FileNotFoundError as exc:
            raise LaunchError(f"{argv[0]}: command not found") from exc
        except OSError as exc:
            raise LaunchError(f"{argv[0]}: cannot execute: {exc.strerror or exc}") from exc

        with _forward_signals(child):
            returncode = child.wait()
        log.debug("pid %d exited with %d", child.pid, returncode)
        return _exit_status(returncode)


def run(
    strategy: Union[Strategy, str, None],
    target_command: Sequence[str],
    working_directory: Optional[str] = None,
    log_path: Optional[str] = None,
) -> int:
    return Launcher().run(strategy, target_command, working_directory, log_path)
