# on_the_gpu/config.py
from __future__ import annotations

import os
from typing import Optional

# *** How to override at runtime:
# export ON_THE_GPU_LOG=~/games/logs/on-the-gpu.log     # append one line per run
# export ON_THE_GPU_LAST_RUN=~/games/logs/on-the-gpu--last-run.log
# export ON_THE_GPU_GL_WRAPPER=optirun                 # older Bumblebee wrapper
# export ON_THE_GPU_LOG_LEVEL=WARNING                  # hide the run banner

LOG_LEVEL = os.getenv("ON_THE_GPU_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s  %(levelname)s %(message)s"

DEFAULT_WRAPPERS = {
    "vulkan": "pvkrun",
    "gl": "primusrun",
}


def wrapper_binary(strategy_value: str) -> str:
    """Wrapper for a strategy value; ON_THE_GPU_<VALUE>_WRAPPER wins over the default."""
    env_name = f"ON_THE_GPU_{strategy_value.upper()}_WRAPPER"
    return os.getenv(env_name) or DEFAULT_WRAPPERS[strategy_value]


def _path_from_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    return os.path.expanduser(value) if value else None


def default_log_path() -> Optional[str]:
    return _path_from_env("ON_THE_GPU_LOG")


def last_run_path() -> Optional[str]:
    return _path_from_env("ON_THE_GPU_LAST_RUN")


def default_strategy() -> str:
    return os.getenv("ON_THE_GPU_STRATEGY", "vulkan")
