"""on_the_gpu
Run a program on the discrete GPU by prefixing it with a GPU-forcing wrapper.

Modules
-------
config     : environment-variable settings (wrapper binaries, log paths, log level)
errors     : ConfigError / LogWriteError / LaunchError and their exit codes
invocation : Strategy enum and the Invocation model (argv composition, banner)
runlog     : append-only invocation log and the last-run breadcrumb file
launcher   : compose, log, spawn, wait, relay the exit code
cli        : `on-the-gpu` command line
"""

from .errors import ConfigError, LaunchError, LogWriteError
from .invocation import Invocation, Strategy
from .launcher import Launcher, run

__all__ = [
    "ConfigError",
    "Invocation",
    "LaunchError",
    "Launcher",
    "LogWriteError",
    "Strategy",
    "run",
]
