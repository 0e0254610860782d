from __future__ import annotations

EXIT_CONFIG_ERROR = 2
EXIT_LAUNCH_ERROR = 127


class OnTheGpuError(Exception):
    """Base class; `exit_code` is what the wrapper process exits with."""

    exit_code = 1


class ConfigError(OnTheGpuError):
    """Empty command, unknown strategy, bad working directory."""

    exit_code = EXIT_CONFIG_ERROR


class LogWriteError(OnTheGpuError):
    """The invocation log could not be opened or written. Never fatal."""


class LaunchError(OnTheGpuError):
    """The GPU-forcing wrapper binary is missing or could not be started."""

    exit_code = EXIT_LAUNCH_ERROR
