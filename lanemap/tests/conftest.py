"""
Shared pytest fixtures for lanemap tests

Supports both development mode (pytest from the repo root) and installed mode (pip install -e .)
"""
import pytest
import pandas as pd
from pathlib import Path
import sys

from lanemap.features import IdAllocator
from lanemap.layout import Layout
from lanemap.measure import MonospaceMeasurer


@pytest.fixture(scope="session", autouse=True)
def setup_lanemap_path():
    """
    Add repository root to Python path for development mode

    Structure:
      repo/                  <- repo root (added to sys.path)
      └── lanemap/           <- package
          └── tests/
              └── conftest.py  <- we are here
    """
    repo_root = Path(__file__).parent.parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


@pytest.fixture
def ids():
    """Fresh id allocator"""
    return IdAllocator()


@pytest.fixture
def measure():
    """Deterministic text measurer: 0.6 * font size per character"""
    return MonospaceMeasurer()


@pytest.fixture
def layout():
    """Empty layout with default configuration (760px wide)"""
    return Layout(width=760)


@pytest.fixture
def gene_layout():
    """
    Three genes on one track

        geneA [1000, 3000)   lane 0
        geneB [2000, 4000)   lane 1 (overlaps geneA)
        geneC [5000, 6000)   lane 0
    """
    layout = Layout(width=760)
    layout.add_gene(1000, 2000, '+', name='geneA')
    layout.add_gene(2000, 2000, '-', name='geneB')
    layout.add_gene(5000, 1000, '+', name='geneC')
    return layout


@pytest.fixture
def feature_table():
    """Feature table as produced by an external parser"""
    return pd.DataFrame({
        'position': [100, 500, 2500, 2600],
        'length': [800, 1200, 300, 900],
        'strand': ['+', '-', '+', '+'],
        'type': ['gene', 'gene', 'protein', 'protein'],
        'name': ['alpha', 'beta', None, 'delta'],
        'track': ['genes', 'genes', 'proteins', 'proteins'],
    })


# Pytest configuration
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual functions"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests running the full layout pipeline or CLI"
    )
    config.addinivalue_line(
        "markers", "coordinates: Tests validating coordinate <-> pixel calculations"
    )
