"""rario/debug.py — Debug flag from environment variable."""

import os

DEBUG = os.environ.get("RARIO_DEBUG", "") == "1"
