import pytest
import random
import sys
import tempfile
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from backend.services.database import DatabaseService
from core.playback import PlaybackState

# Hypothesis configuration for property-based testing
from hypothesis import settings
from tests.helpers.catalog import make_song, seed_catalog

# Register Hypothesis profiles
settings.register_profile("fast", max_examples=50, deadline=None)
settings.register_profile("thorough", max_examples=1000, deadline=None)
settings.load_profile("fast")  # Default to fast profile


def pytest_collection_modifyitems(items):
    """Automatically order tests: unit tests first, then property tests, then API tests.

    Individual tests marked with @pytest.mark.order("last") will run at the very end.
    """
    for item in items:
        # Skip if item already has explicit order marker
        if hasattr(item, 'get_closest_marker') and item.get_closest_marker('order'):
            continue

        test_file = str(item.fspath)
        if 'test_unit_' in test_file:
            item.add_marker(pytest.mark.order(1))
        elif 'test_props_' in test_file:
            item.add_marker(pytest.mark.order(2))
        elif 'test_api_' in test_file:
            item.add_marker(pytest.mark.order(3))


@pytest.fixture
def songs():
    """Three songs standing for album tracks A, B, C."""
    return [make_song(1, title="A"), make_song(2, title="B"), make_song(3, title="C")]


@pytest.fixture
def player():
    """Playback state with a seeded RNG for deterministic shuffle."""
    return PlaybackState(volume=0.8, skip_back_threshold=3.0, rng=random.Random(1234))


@pytest.fixture
def backend_db():
    """Create a temporary backend database for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseService(db_path)
    yield db

    db_path.unlink(missing_ok=True)


@pytest.fixture
def catalog_db(backend_db):
    """Backend database pre-populated with one artist, one album, three songs and two games."""
    seed_catalog(backend_db)
    return backend_db
