"""
Root pytest configuration for the raycore test suite.

Puts the project root on the import path so the raycore package can be
imported from a plain checkout, without installation. HTML report hooks live
in tests/test_raycore/conftest.py.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
