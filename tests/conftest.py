import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'storage'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from storage.core.config import clear_all_caches
from storage.core.utils.stdlib_logging import reset_logging_for_tests


# STORAGE_* variables leaking from the developer's shell would change the
# bundled defaults every test relies on.
@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    for key in list(os.environ):
        if key.startswith("STORAGE_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()
    reset_logging_for_tests()


@pytest.fixture
def app():
    from storage import Storage

    return Storage()
