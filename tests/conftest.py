import sys
from pathlib import Path

import pytest

# Make the package importable without installation
PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))


@pytest.fixture
def line_points():
    return [(0, 0), (1, 2), (2, 4), (3, 6), (4, 8)]


@pytest.fixture
def flat_points():
    return [(1, 5), (2, 5), (3, 5), (4, 5), (5, 5), (6, 5)]
