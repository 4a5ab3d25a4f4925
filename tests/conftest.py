# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from chartdata.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    # handlers bind sys.stdout at creation; capsys swaps it per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_query_yaml() -> str:
    return """columns:
  - [stephen, engineer, 36, 0.5]
  - [jack, sales, 28, 0.25]
  - [tom, engineer, 30, 0.125]
metas:
  - name: name
  - name: current(profession)
  - name: SUM(age)
  - name: rate
sections:
  - key: dimension
    type: group
    rows:
      - colName: Name
      - colName: Profession
        aggregate: CURRENT
  - key: metrics
    type: aggregate
    rows:
      - colName: Age
        aggregate: SUM
        format:
          type: numeric
          numeric:
            decimalPlaces: 1
            unitKey: none
            useThousandSeparator: false
            prefix: ''
            suffix: ' yrs'
      - colName: Rate
        format:
          type: percentage
          percentage:
            decimalPlaces: 1
"""


@pytest.fixture()
def sample_engine_yaml() -> str:
    return """formatting:
  max_decimal_places: 10
  currencies:
    btc: "₿"
  units:
    lakh:
      multiplier: 100000
      label: L
tooltip:
  separator: " | "
  empty_value: "n/a"
scatter:
  base_symbol_size: 5
  min_symbol_size: 1
logging:
  level: INFO
"""


@pytest.fixture()
def write_query(temp_workdir: Path, sample_query_yaml: str) -> Path:
    path = temp_workdir / "data" / "result.yml"
    path.write_text(sample_query_yaml, encoding="utf-8")
    return path


@pytest.fixture()
def write_engine_config(temp_workdir: Path, sample_engine_yaml: str) -> Path:
    path = temp_workdir / "config" / "engine.yml"
    path.write_text(sample_engine_yaml, encoding="utf-8")
    return path


@pytest.fixture()
def profession_dataset():
    from chartdata.models.dataset import transform_to_dataset

    columns = [
        ["stephen", "engineer", "36"],
        ["jack", "sales", "28"],
        ["tom", "engineer", "30"],
        ["john", "sales", "32"],
    ]
    metas = [{"name": "name"}, {"name": "current(profession)"}, {"name": "age"}]
    sections = [
        {
            "rows": [
                {"colName": "name"},
                {"colName": "profession", "aggregate": "current"},
                {"colName": "age"},
            ]
        }
    ]
    return transform_to_dataset(columns, metas, sections)
