"""Test bootstrap for coach_chat.

``coach_chat.config`` builds its ``Settings`` at import time and needs the
Postgres credentials and ``GEMINI_API_KEY``. The values in ``.env.test`` are
exported here, before any test module imports the app. Variables already set
in the environment take precedence, so CI can point the suite elsewhere.
"""
from __future__ import annotations

import os
from pathlib import Path

ENV_FILE = Path(__file__).resolve().parent / ".env.test"


def _export_test_env(path: Path) -> None:
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.removeprefix("export ").partition("=")
        if not sep:
            continue
        os.environ.setdefault(key.strip(), value.strip().strip("'\""))


if ENV_FILE.is_file():
    _export_test_env(ENV_FILE)
