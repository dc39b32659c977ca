from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import List

import pytest

ROOT = Path(__file__).resolve().parent.parent

# repo root for `tests.support`, src/ for the tinyimp package
for path in (ROOT, ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.append(str(path))


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    """Reject parametrize tables that reuse a case id."""
    del config

    counts = Counter(item.nodeid for item in items)
    repeated = sorted(nodeid for nodeid, n in counts.items() if n > 1)

    if repeated:
        listing = "\n".join(f"  {nodeid}" for nodeid in repeated)
        raise pytest.UsageError(f"tinyimp tests collected duplicate ids:\n{listing}")
