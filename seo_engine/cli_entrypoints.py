#!/usr/bin/env python3
"""Console-script wrapper for the Auto-SEO refresh.

After an editable install (``pip install -e .``) the following command becomes
available system-wide:

* ``auto-seo-refresh``: fetch daily trends and update ``data/seo.json``

Extra arguments (``--geo``, ``--seo-path``, ``--verbose``) are forwarded
unchanged to ``scripts/refresh_meta.py`` so there is no business-logic
duplication.
"""
from __future__ import annotations

import sys
from pathlib import Path
from subprocess import run
from typing import List, Optional

PYTHON = sys.executable
ROOT = Path(__file__).resolve().parents[1]  # Repository root


def _build_command(argv: List[str]) -> List[str]:
    """Return the command list used to invoke ``refresh_meta.py``."""
    return [PYTHON, str(ROOT / "scripts/refresh_meta.py"), *argv]


def refresh(argv: Optional[List[str]] = None) -> None:
    """Run the metadata refresh and exit with its status."""
    cmd = _build_command(sys.argv[1:] if argv is None else argv)
    sys.exit(run(cmd).returncode)
