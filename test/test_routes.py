from fastapi.testclient import TestClient

from main import create_app


# ------------------------------------------------------------
# 🔹 Listing
# ------------------------------------------------------------
def test_index_lists_json_users(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert '<a href="/alice">alice</a>' in resp.text
    assert '<a href="/bob">bob</a>' in resp.text
    assert "notes" not in resp.text


def test_api_users_returns_array(client):
    resp = client.get("/api/users")
    assert resp.status_code == 200
    assert sorted(resp.json()) == ["alice", "bob"]


def test_listing_reflects_directory_on_every_request(client, data_dir):
    (data_dir / "carol.json").write_text("{}", encoding="utf-8")
    assert "carol" in client.get("/api/users").json()
    (data_dir / "carol.json").unlink()
    assert "carol" not in client.get("/api/users").json()


def test_listing_errors_when_directory_missing(tmp_path, public_dir):
    client = TestClient(create_app(data_dir=tmp_path / "missing", public_dir=public_dir))

    page = client.get("/")
    assert page.status_code == 500
    assert page.headers["content-type"].startswith("text/plain")
    assert page.text == "Error reading data directory"

    api = client.get("/api/users")
    assert api.status_code == 500
    assert api.json() == {"error": "Error reading data directory"}


# ------------------------------------------------------------
# 🔹 JSON API
# ------------------------------------------------------------
def test_api_user_returns_raw_record(client, alice_record):
    resp = client.get("/api/users/alice")
    assert resp.status_code == 200
    assert resp.json() == alice_record


def test_api_user_not_found(client):
    resp = client.get("/api/users/ghost")
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_api_user_parse_error(client, data_dir):
    (data_dir / "broken.json").write_text("{oops", encoding="utf-8")
    resp = client.get("/api/users/broken")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Error parsing user data"}


def test_api_user_read_error(client, data_dir):
    (data_dir / "folder.json").mkdir()
    resp = client.get("/api/users/folder")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Error reading user file"}


def test_api_user_rejects_unsafe_username(client):
    resp = client.get("/api/users/..%2E")
    assert resp.status_code == 404


# ------------------------------------------------------------
# 🔹 HTML profile pages
# ------------------------------------------------------------
def test_profile_page_renders(client):
    resp = client.get("/alice")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "<h1>Alice Example</h1>" in resp.text


def test_profile_page_not_found(client):
    resp = client.get("/ghost")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("text/html")
    assert "ghost" in resp.text
    assert "User Not Found" in resp.text


def test_profile_page_parse_error_is_plain_text(client, data_dir):
    (data_dir / "broken.json").write_text("not json", encoding="utf-8")
    resp = client.get("/broken")
    assert resp.status_code == 500
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "Error parsing user data"


def test_profile_page_read_error_is_plain_text(client, data_dir):
    (data_dir / "folder.json").mkdir()
    resp = client.get("/folder")
    assert resp.status_code == 500
    assert resp.text == "Error reading user file"


def test_profile_page_for_non_object_record(client, data_dir):
    (data_dir / "listy.json").write_text("[1, 2]", encoding="utf-8")
    resp = client.get("/listy")
    assert resp.status_code == 200
    assert "<h1>listy</h1>" in resp.text


def test_api_routes_are_not_shadowed_by_profile_route(client, data_dir):
    # a user literally named "api" must not hide the JSON API
    (data_dir / "api.json").write_text('{"name": "Api"}', encoding="utf-8")
    assert client.get("/api/users").status_code == 200
    assert client.get("/api").status_code == 200
    assert "<h1>Api</h1>" in client.get("/api").text


def test_docs_username_is_not_taken_by_openapi(client, data_dir):
    (data_dir / "docs.json").write_text('{"name": "Doc"}', encoding="utf-8")
    resp = client.get("/docs")
    assert resp.status_code == 200
    assert "<h1>Doc</h1>" in resp.text


# ------------------------------------------------------------
# 🔹 Odd paths and odd records
# ------------------------------------------------------------
def test_nul_byte_path_is_not_found_page(client):
    resp = client.get("/%00")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("text/html")
    assert "does not exist" in resp.text


def test_encoded_slash_gets_not_found_page(client):
    resp = client.get("/a%2Fb")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("text/html")
    assert 'The user "a/b" does not exist.' in resp.text


def test_encoded_slash_in_api_gets_json_not_found(client):
    resp = client.get("/api/users/a%2Fb")
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_multi_segment_path_keeps_default_not_found(client):
    resp = client.get("/a/b")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("application/json")


def test_lone_surrogate_record_is_served(client, data_dir):
    (data_dir / "sur.json").write_text('{"name": "\\ud800", "bio": "ok"}', encoding="utf-8")

    api = client.get("/api/users/sur")
    assert api.status_code == 200
    assert b'"\\ud800"' in api.content
    assert api.json() == {"name": "\ud800", "bio": "ok"}

    page = client.get("/sur")
    assert page.status_code == 200
    assert b"<h1>\\ud800</h1>" in page.content


def test_api_escapes_non_ascii(client, data_dir):
    (data_dir / "zoe.json").write_text('{"name": "Zoë"}', encoding="utf-8")
    resp = client.get("/api/users/zoe")
    assert b"Zo\\u00eb" in resp.content
    assert resp.json() == {"name": "Zoë"}
