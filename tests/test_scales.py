from urllib.parse import quote

from gpa import max_scale_points
from scales import get_conversion_scale, get_scale, list_countries, list_scales, search_institutions


def test_builtin_scales_registered():
    names = [s.name for s in list_scales()]
    assert names[:3] == ["4.0 Scale (Standard)", "5.0 Scale (Weighted)", "Percentage Scale"]
    assert "10-point CGPA" in names
    assert "Class Honours" in names


def test_scale_maximums():
    assert max_scale_points(get_scale("4.0 Scale (Standard)")) == 4.0
    assert max_scale_points(get_scale("5.0 Scale (Weighted)")) == 5.0
    assert max_scale_points(get_scale("10-point CGPA")) == 10


def test_conversion_scale_fallback():
    assert get_conversion_scale("Class Honours").name == "Class Honours"
    assert get_conversion_scale("Unheard Of").name == "4.0 GPA"


def test_search_institutions_by_name_and_country():
    assert {i.id for i in search_institutions("indian institute")} == {"iit-bombay", "iit-delhi", "iisc-bangalore"}
    assert [i.id for i in search_institutions("uk")] == ["cambridge"]
    assert len(search_institutions()) == 8


def test_search_institutions_country_filter():
    india = search_institutions("", "India")
    assert len(india) == 5
    assert all(i.country == "India" for i in india)
    assert len(search_institutions("", "all")) == 8
    assert search_institutions("MIT", "India") == []


def test_list_countries_in_first_seen_order():
    assert list_countries() == ["India", "USA", "UK", "China"]


def test_grading_scales_endpoint(client):
    resp = client.get("/api/grading-scales")
    assert resp.status_code == 200
    first = resp.json()[0]
    assert first["name"] == "4.0 Scale (Standard)"
    assert first["grades"]["A-"] == 3.7


def test_grading_scale_by_name_endpoint(client):
    resp = client.get(f"/api/grading-scales/{quote('5.0 Scale (Weighted)')}")
    assert resp.status_code == 200
    assert resp.json()["grades"]["A"] == 5.0


def test_grading_scale_not_found(client):
    resp = client.get("/api/grading-scales/Imaginary")
    assert resp.status_code == 404


def test_institutions_endpoint(client):
    resp = client.get("/api/institutions", params={"search": "tech", "country": "USA"})
    assert resp.status_code == 200
    data = resp.json()
    assert [i["id"] for i in data] == ["mit"]
    assert data[0]["gradingSystem"] == "4.0 GPA"
    assert data[0]["recognitionLevel"] == "High"


def test_countries_endpoint(client):
    assert client.get("/api/institutions/countries").json() == ["India", "USA", "UK", "China"]
