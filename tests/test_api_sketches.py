import json

from conftest import sketch_payload


def test_list_starts_empty(client) -> None:
    r = client.get("/api/sketches")
    assert r.status_code == 200
    assert r.get_json() == []


def test_create_sketch_normalizes_url_and_returns_slug(client, weeks) -> None:
    r = client.post("/api/sketches", json=sketch_payload())
    assert r.status_code == 201
    body = r.get_json()
    assert body["slug"] == "frog-erpulat"
    assert body["url"] == "https://openprocessing.org/sketch/2376645/embed"
    assert body["width"] == 600

    listed = client.get("/api/sketches").get_json()
    assert [s["slug"] for s in listed] == ["frog-erpulat"]


def test_create_persists_without_slug_and_regenerates_snapshot(app, client, weeks) -> None:
    client.post("/api/sketches", json=sketch_payload(width="800"))
    with open(app.config["SKETCHES_PATH"], encoding="utf-8") as f:
        stored = json.load(f)
    assert "slug" not in stored[0]
    assert stored[0]["width"] == 800

    snap = client.get("/api/config").get_json()
    assert snap["sketches"][0]["slug"] == "frog-erpulat"
    assert [f["id"] for f in snap["folders"]] == weeks


def test_zero_width_is_rejected(client, weeks) -> None:
    r = client.post("/api/sketches", json=sketch_payload(width=0))
    assert r.status_code == 400
    body = r.get_json()
    assert body["error"] == "validation_error"
    assert body["field"] == "width"


def test_missing_and_invalid_fields(client, weeks) -> None:
    payload = sketch_payload()
    del payload["author"]
    assert client.post("/api/sketches", json=payload).get_json()["field"] == "author"
    assert client.post("/api/sketches", json=sketch_payload(url="ftp://x/y")).get_json()["field"] == "url"
    assert client.post("/api/sketches", json=sketch_payload(height=10001)).status_code == 400
    assert client.post("/api/sketches", json=sketch_payload(week="Week 2")).status_code == 400
    assert client.post("/api/sketches", json=sketch_payload(week="week2\n")).get_json()["field"] == "week"
    assert client.post("/api/sketches", data="not json").status_code == 400


def test_description_is_optional_and_sanitized(client, weeks) -> None:
    payload = sketch_payload(description="nice<script>alert(1)</script>")
    r = client.post("/api/sketches", json=payload)
    assert r.get_json()["description"] == "nice"
    payload = sketch_payload(title="Other")
    del payload["description"]
    assert client.post("/api/sketches", json=payload).get_json()["description"] == ""


def test_duplicate_title_author_conflicts(client, weeks) -> None:
    assert client.post("/api/sketches", json=sketch_payload()).status_code == 201
    r = client.post("/api/sketches", json=sketch_payload(author="Ayşe Erpulat", title="FROG!"))
    assert r.status_code == 409
    assert r.get_json()["error"] == "conflict"


def test_unknown_week_conflicts(client, weeks) -> None:
    r = client.post("/api/sketches", json=sketch_payload(week="week9"))
    assert r.status_code == 409


def test_patch_rename_changes_slug(client, weeks) -> None:
    client.post("/api/sketches", json=sketch_payload())
    r = client.patch("/api/sketches/frog-erpulat", json={"title": "Toad", "width": 320})
    assert r.status_code == 200
    body = r.get_json()
    assert body["slug"] == "toad-erpulat"
    assert body["width"] == 320
    assert body["height"] == 600

    assert client.patch("/api/sketches/frog-erpulat", json={"width": 1}).status_code == 404
    assert client.patch("/api/sketches/toad-erpulat", json={"week": "week1"}).get_json()["week"] == "week1"


def test_patch_rename_collision(client, weeks) -> None:
    client.post("/api/sketches", json=sketch_payload())
    client.post("/api/sketches", json=sketch_payload(title="Toad"))
    r = client.patch("/api/sketches/toad-erpulat", json={"title": "Frog"})
    assert r.status_code == 409
    # same slug as itself is fine
    assert client.patch("/api/sketches/toad-erpulat", json={"title": "TOAD"}).status_code == 200


def test_patch_validation_and_unknown_week(client, weeks) -> None:
    client.post("/api/sketches", json=sketch_payload())
    assert client.patch("/api/sketches/frog-erpulat", json={"height": -1}).status_code == 400
    assert client.patch("/api/sketches/frog-erpulat", json={"author": ""}).status_code == 400
    assert client.patch("/api/sketches/frog-erpulat", json={"week": "week7"}).status_code == 409


def test_patch_normalizes_new_url(client, weeks) -> None:
    client.post("/api/sketches", json=sketch_payload())
    r = client.patch("/api/sketches/frog-erpulat", json={"url": "https://editor.p5js.org/elif/sketches/XYZ"})
    assert r.get_json()["url"] == "https://editor.p5js.org/elif/full/XYZ"


def test_delete_by_current_slug(client, weeks) -> None:
    client.post("/api/sketches", json=sketch_payload())
    r = client.delete("/api/sketches/FROG-ERPULAT")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True}
    assert client.delete("/api/sketches/frog-erpulat").status_code == 404
    assert client.get("/api/sketches").get_json() == []


def test_slugs_stay_unique_after_mixed_mutations(client, weeks) -> None:
    for title in ("Frog", "Toad", "Newt"):
        client.post("/api/sketches", json=sketch_payload(title=title))
    client.patch("/api/sketches/newt-erpulat", json={"title": "Frog"})
    client.patch("/api/sketches/newt-erpulat", json={"author": "Someone Else"})
    client.post("/api/sketches", json=sketch_payload(title="Newt", author="Someone Else"))
    client.delete("/api/sketches/toad-erpulat")
    client.patch("/api/sketches/frog-erpulat", json={"title": "Toad"})

    slugs = [s["slug"] for s in client.get("/api/sketches").get_json()]
    assert sorted(slugs) == ["newt-else", "toad-erpulat"]
    assert len(slugs) == len(set(slugs))


def test_huge_integer_dimension_is_a_validation_error(client, weeks) -> None:
    r = client.post("/api/sketches", json=sketch_payload(width=10 ** 400))
    assert r.status_code == 400
    assert r.get_json()["field"] == "width"
