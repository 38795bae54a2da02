import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _clean_scciter_env(monkeypatch):
    monkeypatch.delenv("SCCITER_TRACE", raising=False)
    monkeypatch.delenv("SCCITER_CHECK_STATE", raising=False)
