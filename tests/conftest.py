from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.main import app


HEADER = "uuid,old_geojson,new_geojson"

OLD_POLYGON = (
    '"{""type"":""Polygon"",""coordinates"":'
    '[[[77.0,28.0],[78.0,28.0],[78.0,29.0],[77.0,29.0],[77.0,28.0]]]}"'
)
NEW_FEATURE = (
    '"{""type"":""Feature"",""properties"":{""name"":""plot, revised""},'
    '""geometry"":{""type"":""Point"",""coordinates"":[80.0,30.0]}}"'
)


@pytest.fixture()
def write_csv(tmp_path: Path):
    """
    Writes the given lines to a CSV file under tmp_path and returns its path.
    """
    def _write(*lines: str, name: str = "data.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def sample_csv(write_csv):
    return write_csv(
        HEADER,
        f"id1,{OLD_POLYGON},{NEW_FEATURE}",
        "",
        'id2,"{""type"":""Point""}",',
        "id3,,",
        'id4,"{""type"":""Point"",""coordinates"":[1,2]}","{""type"":""Point"""',
    )


@pytest.fixture()
def client(sample_csv, monkeypatch):
    monkeypatch.setenv("GEOCOMPARE_DATA_PATH", str(sample_csv))
    monkeypatch.delenv("GEOCOMPARE_STRICT_HEADER", raising=False)
    return TestClient(app)
