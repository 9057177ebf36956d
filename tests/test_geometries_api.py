from bs4 import BeautifulSoup

from api import main


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_get_geometries_success(client):
    r = client.get("/api/get-geometries/id2")
    assert r.status_code == 200, r.text
    assert r.json() == {"uuid": "id2", "oldGeojson": {"type": "Point"}, "newGeojson": None}


def test_get_geometries_nested_payload(client):
    data = client.get("/api/get-geometries/id1").json()
    assert data["oldGeojson"]["coordinates"][0][0] == [77.0, 28.0]
    assert data["newGeojson"]["geometry"]["coordinates"] == [80.0, 30.0]


def test_get_geometries_not_found(client):
    r = client.get("/api/get-geometries/missing-id")
    assert r.status_code == 404
    assert r.json() == {"error": "UUID not found"}


def test_get_geometries_malformed_payload(client):
    r = client.get("/api/get-geometries/id4")
    assert r.status_code == 400
    assert "new_geojson" in r.json()["error"]


def test_get_geometries_missing_file(client, tmp_path, monkeypatch):
    monkeypatch.setenv("GEOCOMPARE_DATA_PATH", str(tmp_path / "gone.csv"))

    r = client.get("/api/get-geometries/id1")
    assert r.status_code == 404
    assert r.json() == {"error": "Data file not found"}


def test_get_geometries_malformed_header(client, write_csv, monkeypatch):
    path = write_csv("id,geometry", "id1,,", name="bad.csv")
    monkeypatch.setenv("GEOCOMPARE_DATA_PATH", str(path))

    r = client.get("/api/get-geometries/id1")
    assert r.status_code == 400
    assert r.json()["error"].startswith("Invalid CSV format")


def test_get_geometries_unexpected_failure(client, monkeypatch):
    def boom(uuid):
        raise OSError("disk on fire")

    monkeypatch.setattr(main.lookup_service, "lookup", boom)

    r = client.get("/api/get-geometries/id1")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}


def test_home_page(client):
    r = client.get("/")
    assert r.status_code == 200
    soup = BeautifulSoup(r.text, "html.parser")
    assert soup.find("h1").get_text(strip=True) == "GeoJSON Compare"
    assert "/compare/" in soup.get_text()


def test_compare_page_renders_map(client):
    r = client.get("/compare/id1")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")

    soup = BeautifulSoup(r.text, "html.parser")
    assert soup.find("h1").get_text(strip=True) == "GeoJSON Comparison"
    assert "UUID: id1" in soup.get_text()
    assert len(soup.select(".geocompare-legend")) == 1
    assert "#ef4444" in r.text
    assert "#3b82f6" in r.text
    assert "fitBounds" in r.text


def test_compare_page_shows_error_message(client):
    r = client.get("/compare/missing-id")
    assert r.status_code == 404

    soup = BeautifulSoup(r.text, "html.parser")
    assert soup.select_one(".message").get_text(strip=True) == "UUID not found"


def test_compare_page_escapes_uuid(client):
    r = client.get("/compare/<i>x")
    assert r.status_code == 404
    assert "<i>x" not in r.text
    assert "&lt;i&gt;x" in r.text


def test_get_geometries_rejects_nan_coordinates(client, write_csv, monkeypatch):
    path = write_csv(
        "uuid,old_geojson,new_geojson",
        'id1,"{""type"":""Point"",""coordinates"":[NaN,1]}",',
        name="nan.csv",
    )
    monkeypatch.setenv("GEOCOMPARE_DATA_PATH", str(path))

    r = client.get("/api/get-geometries/id1")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON in old_geojson for UUID id1"}
