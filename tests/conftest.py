from __future__ import annotations

import os
import tempfile

# Settings are read at import time, so point storage at a scratch dir first.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="xstitch-tests-"))
os.environ.setdefault("STORAGE_BACKEND", "fs")
