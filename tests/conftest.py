import json
import os
import sys
from pathlib import Path

import pytest

PY = sys.executable

RECORDER = """\
import json, os, sys
out, code = sys.argv[1], int(sys.argv[2])
with open(out, "w") as fh:
    json.dump({"argv": sys.argv[3:], "cwd": os.getcwd()}, fh)
sys.exit(code)
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("ON_THE_GPU_"):
            monkeypatch.delenv(name)


@pytest.fixture
def recorder(tmp_path: Path):
    """Child program that dumps its args and cwd to JSON and exits with a chosen code.

    Usage: [str(script), str(out), "<exit code>", *extra_args]
    """
    script = tmp_path / "recorder.py"
    script.write_text(RECORDER, encoding="utf-8")
    out = tmp_path / "recorded.json"

    class Recorder:
        path = script
        output = out

        @staticmethod
        def command(code: int = 0, *extra: str):
            return [str(script), str(out), str(code), *extra]

        @staticmethod
        def result():
            return json.loads(out.read_text(encoding="utf-8"))

    return Recorder
