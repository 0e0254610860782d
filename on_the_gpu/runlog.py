# on_the_gpu/runlog.py
"""
Plain-text records of what the wrapper ran.

• append_invocation(path, cwd, argv)   → one line per run, append-only
• write_last_run(path, own_argv, cmd)  → overwritten breadcrumb for "did it even start?"

Both raise LogWriteError; callers decide whether that matters (it never does
for the launcher).
"""

from __future__ import annotations

from contextlib import contextmanager, suppress
from datetime import datetime
from pathlib import Path
from typing import IO, Iterator, Optional, Sequence

from .errors import LogWriteError


@contextmanager
def _open_log(path: str, mode: str) -> Iterator[IO[str]]:
    """Open `path`, turning OSError/UnicodeError into LogWriteError; always closes.

    Undecodable bytes in arguments (surrogate-escaped by Python) are written
    back out as the original bytes.
    """
    try:
        fh = Path(path).open(mode, encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise LogWriteError(f"cannot open log file {path}: {exc}") from exc
    try:
        yield fh
        fh.flush()
    except (OSError, UnicodeError) as exc:
        # the unflushed buffer fails again on close
        with suppress(OSError):
            fh.close()
        raise LogWriteError(f"cannot write log file {path}: {exc}") from exc
    finally:
        fh.close()


def _one_line(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n").replace("\r", "\\r")


def format_line(cwd: str, argv: Sequence[str], now: Optional[datetime] = None) -> str:
    """`<ts> cwd=<cwd> cmd=<argv joined by spaces>`; backslashes and line breaks escaped."""
    ts = (now or datetime.now().astimezone()).isoformat(timespec="seconds")
    cmd = " ".join(_one_line(arg) for arg in argv)
    return f"{ts} cwd={_one_line(cwd)} cmd={cmd}\n"


def append_invocation(path: str, cwd: str, argv: Sequence[str]) -> None:
    line = format_line(cwd, argv)
    with _open_log(path, "a") as fh:
        fh.write(line)


def write_last_run(path: str, own_argv: Sequence[str], command: Sequence[str]) -> None:
    lines = ["Our arguments:"]
    lines += [f"  argv[{i}] = {arg!r}" for i, arg in enumerate(own_argv)]
    lines.append("The command we're to run:")
    lines += [f"  cmd[{i}] = {arg!r}" for i, arg in enumerate(command)]
    lines.append("Done.")
    with _open_log(path, "w") as fh:
        fh.write("\n".join(lines) + "\n")
