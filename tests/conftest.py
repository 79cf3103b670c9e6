"""Global pytest configuration for the typecore test-suite.

The module primarily ensures the ``src`` tree is importable regardless of how
the repository is cloned, and provides the factories shared by the unit tests.
"""

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Add the src directory to the Python path so imports can work correctly
# without needing to add the 'src.' prefix to every import
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from typecore.core.store import SnapshotStore  # noqa: E402
from typecore.events import EventBus  # noqa: E402
from typecore.models import Result  # noqa: E402
from typecore.storage.backends.in_memory import InMemoryBackend  # noqa: E402
from typecore.storage.local_store import LocalSnapshotStorage  # noqa: E402


@pytest.fixture
def make_result() -> Callable[..., Result]:
    """Return a factory for time-15 english results with overridable fields."""

    counter = {"n": 0}

    def factory(**overrides: Any) -> Result:
        counter["n"] += 1
        data = {
            "_id": f"result-{counter['n']}",
            "mode": "time",
            "mode2": "15",
            "punctuation": False,
            "numbers": False,
            "lazyMode": False,
            "difficulty": "normal",
            "language": "english",
            "wpm": 100.0,
            "acc": 95.0,
            "rawWpm": 105.0,
            "consistency": 80.0,
            "timestamp": 1_700_000_000_000,
            "tags": [],
            "testDuration": 15.0,
            "afkDuration": 0.0,
            "incompleteTestSeconds": 0.0,
            "restartCount": 0,
            "charStats": [100, 2, 0, 0],
            "funbox": [],
        }
        data.update(overrides)
        return Result.model_validate(data)

    return factory


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def storage(memory_backend: InMemoryBackend) -> LocalSnapshotStorage:
    return LocalSnapshotStorage(memory_backend)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def store(storage: LocalSnapshotStorage, event_bus: EventBus) -> SnapshotStore:
    """Uninitialized store over an in-memory backend."""
    return SnapshotStore(storage, event_bus=event_bus)
