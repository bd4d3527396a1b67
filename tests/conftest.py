"""
Shared fixtures for the catalog import pipeline tests.
"""

import sys
from pathlib import Path

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.catalog_import.common.config import PipelineConfig


TIME_LOG = """Datum KUPICA AKKUAK
2021-01-04 00:45 01:10
2021-01-05 00:50 NA
2021-01-07 01:05 01:40
"""

IMPORT_LOG = """# import statistics export
Datum Gesamt SWB ZDB EZB Online >4000 Subfields >40kB
2021-01-04 480 300 80 60 40 1 2
2021-01-04 500 310 85 65 40 1 3
2021-01-05 620 400 100 80 40 0 1
2021-01-06 300 200 50 30 20 0 0
"""


@pytest.fixture
def write_logs(tmp_path):
    """Write a time log and an import log, return a PipelineConfig for them."""

    def _write(time_text: str = TIME_LOG, import_text: str = IMPORT_LOG) -> PipelineConfig:
        time_path = tmp_path / "time.log"
        import_path = tmp_path / "import_stats.log"
        time_path.write_text(time_text, encoding="utf-8")
        import_path.write_text(import_text, encoding="utf-8")
        return PipelineConfig(
            time_log=time_path,
            import_log=import_path,
            output=tmp_path / "out" / "merged.tsv",
        )

    return _write
