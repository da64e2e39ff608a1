import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from fills.models import FuelFillRecord  # noqa: E402


@pytest.fixture(autouse=True)
def _default_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FILLS_API_URL", raising=False)
    monkeypatch.delenv("FILLS_API_TOKEN", raising=False)


@pytest.fixture
def make_fill():
    counter = {"next_id": 1}

    def _make(**fields) -> FuelFillRecord:
        if "id" not in fields:
            fields["id"] = counter["next_id"]
            counter["next_id"] += 1
        fields.setdefault("vehicle_id", 1)
        fields.setdefault("date", "2024-01-01")
        return FuelFillRecord(**fields)

    return _make
