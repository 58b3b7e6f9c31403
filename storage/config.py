"""Configuration settings for tag stores."""

import os
from pathlib import Path


STORE_PATH = Path(os.environ.get("TBF_STORE_PATH", str(Path.home() / ".tbf" / "store")))

STORE_BACKEND = os.environ.get("TBF_BACKEND", "directory")

BACKEND_NAMES = ("directory", "memory")
