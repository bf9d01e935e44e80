import csv
import io

import pytest
from fastapi.testclient import TestClient

from places_scraper.dependencies import get_places_service
from places_scraper.main import app
from places_scraper.models.places import BulkSearchResult, QueryResult
from places_scraper.services.field_masks import PlacesAPIError
from places_scraper.utils.normalizers import normalize_place


class StubService:
    def __init__(self, places=None, error=None):
        self.places = places or []
        self.error = error
        self.calls = []

    async def search(self, query, filters):
        self.calls.append((query, filters))
        if self.error:
            raise self.error
        return self.places

    async def get_details(self, place_id):
        self.calls.append((place_id, None))
        if self.error:
            raise self.error
        return self.places[0]

    async def bulk_search(self, queries, filters):
        self.calls.append((queries, filters))
        return BulkSearchResult(
            places=self.places,
            query_results=[
                QueryResult(query="one", places=self.places, count=len(self.places)),
                QueryResult(query="two", count=0, error="Places API error: quota exceeded"),
            ],
            total_queries=len(queries),
        )


@pytest.fixture
def stub():
    service = StubService(places=[normalize_place({"id": "p1", "displayName": {"text": "Cafe"}, "types": ["cafe"]})])
    app.dependency_overrides[get_places_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


def test_search_returns_camel_case_records(client, stub):
    response = client.post(
        "/api/places/search",
        json={"query": " coffee ", "location": {"lat": 1.5, "lng": 2.5}, "categories": ["cafe"], "maxResults": 5},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 1
    assert body["query"] == "coffee"
    assert body["location"] == {"lat": 1.5, "lng": 2.5}
    assert body["data"][0]["placeId"] == "p1"
    assert body["data"][0]["reviewsDistribution"]["oneStar"] == 0

    query, filters = stub.calls[0]
    assert query == "coffee"
    assert filters.max_results == 5
    assert filters.categories == ["cafe"]
    assert filters.radius == 5000


def test_search_requires_query(client, stub):
    response = client.post("/api/places/search", json={"query": "  "})
    assert response.status_code == 400
    assert response.json()["error"] == "Search query is required"


def test_search_failure_returns_message_only(client, stub):
    stub.error = PlacesAPIError("Places API error: API key not valid", 403)
    response = client.post("/api/places/search", json={"query": "coffee"})
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Places API error: API key not valid"}


def test_invalid_body_is_400(client, stub):
    response = client.post("/api/places/search", json={"query": "coffee", "radius": -1})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_bulk_search(client, stub):
    response = client.post("/api/places/bulk-search", json={"queries": ["one", "two"]})
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["totalQueries"] == 2
    assert body["queryResults"][1] == {
        "query": "two",
        "places": [],
        "count": 0,
        "error": "Places API error: quota exceeded",
    }


def test_bulk_search_validates_queries(client, stub):
    assert client.post("/api/places/bulk-search", json={"queries": []}).status_code == 400
    response = client.post("/api/places/bulk-search", json={"queries": [f"q{i}" for i in range(11)]})
    assert response.status_code == 400
    assert "Maximum 10 queries" in response.json()["error"]


def test_details(client, stub):
    response = client.get("/api/places/details/p1")
    assert response.status_code == 200
    assert response.json()["data"]["id"] == "p1"

    stub.error = PlacesAPIError("Place Details API error: Not found", 404)
    response = client.get("/api/places/details/missing")
    assert response.status_code == 500
    assert response.json()["error"] == "Place Details API error: Not found"


def test_export_csv(client):
    place = normalize_place({
        "id": "p1",
        "displayName": {"text": "=HYPERLINK(\"x\")"},
        "location": {"latitude": -33.86, "longitude": 151.2},
        "types": ["bar", "food"],
        "regularOpeningHours": {"weekdayDescriptions": ["Monday: 5 PM – 1 AM"]},
    }).model_dump(by_alias=True)

    response = client.post("/api/places/export/csv", json={"places": [place], "filename": "bars"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="bars.csv"' in response.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0][0] == "Business Name"
    assert rows[1][0] == "'=HYPERLINK(\"x\")"
    assert rows[1][7] == "bar; food"
    assert rows[1][10] == "-33.86"
    assert rows[1][13] == "Monday: 5 PM – 1 AM"


def test_export_json(client):
    response = client.post("/api/places/export/json", json={"places": [{"name": "A"}]})
    assert response.status_code == 200
    assert 'filename="google-places-export.json"' in response.headers["content-disposition"]
    body = response.json()
    assert body["total_places"] == 1
    assert body["places"] == [{"name": "A"}]


def test_export_requires_places(client):
    assert client.post("/api/places/export/csv", json={"places": []}).status_code == 400
    assert client.post("/api/places/export/json", json={}).status_code == 400


def test_export_csv_stringifies_non_string_types(client):
    response = client.post(
        "/api/places/export/csv",
        json={"places": [{"name": "A", "types": [1, None, "bar"]}]},
    )
    assert response.status_code == 200
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[1][7] == "1; bar"


def test_export_csv_failure_is_structured(client, monkeypatch):
    def broken(places):
        raise TypeError("bad record")

    monkeypatch.setattr("places_scraper.routers.places.generate_csv", broken)
    response = client.post("/api/places/export/csv", json={"places": [{"name": "A"}]})
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to export CSV"}
