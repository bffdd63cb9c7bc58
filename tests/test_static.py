# tests/test_static.py
import os
import pytest
from pathlib import Path
from preview_server.exceptions import PathEscapeError
from preview_server.static import content_type_for, resolve_static_path, serve_static


@pytest.fixture
def site(root):
    (root / "index.html").write_text("<h1>home</h1>", encoding="utf-8")
    (root / "css").mkdir()
    (root / "css" / "site.css").write_text("body{}", encoding="utf-8")
    (root / "some" / "dir").mkdir(parents=True)
    (root / "some" / "dir" / "index.html").write_text("dir index", encoding="utf-8")
    (root / "empty").mkdir()
    (root / "data.bin").write_bytes(b"\x00\x01")
    return root


def test_root_serves_index(client, site):
    res = client.get("/")
    assert res.status_code == 200
    assert res.text == "<h1>home</h1>"
    assert res.headers["content-type"] == "text/html; charset=utf-8"
    assert res.headers["expires"] == "0"


def test_file_with_content_type(client, site):
    res = client.get("/css/site.css")
    assert res.status_code == 200
    assert res.headers["content-type"] == "text/css; charset=utf-8"
    assert res.headers["cache-control"] == "no-cache, no-store, must-revalidate"


def test_unknown_extension_is_octet_stream(client, site):
    res = client.get("/data.bin")
    assert res.content == b"\x00\x01"
    assert res.headers["content-type"] == "application/octet-stream"


def test_directory_paths_serve_index(client, site):
    assert client.get("/some/dir/").text == "dir index"
    assert client.get("/some/dir").text == "dir index"


def test_directory_without_index_is_not_found(client, site):
    assert client.get("/empty/").status_code == 404
    assert client.get("/empty").status_code == 404


def test_missing_file_is_not_found(client, site):
    res = client.get("/nope.js")
    assert res.status_code == 404
    assert res.text == "Not found"


def test_public_prefix_without_route_falls_through(client, site):
    assert client.get("/public/unknown").status_code == 404


def test_traversal_is_rejected(site):
    outside = site.parent / "passwd"
    outside.write_text("secret", encoding="utf-8")
    res = serve_static(site, "/../passwd")
    assert res.status_code == 400
    assert res.body == b"Bad request"
    assert serve_static(site, "/../../etc/passwd").status_code == 400


def test_resolve_stays_inside_root(site):
    assert resolve_static_path(site, "/css/site.css") == (site / "css" / "site.css").resolve()
    assert resolve_static_path(site, "/css/../index.html") == (site / "index.html").resolve()
    with pytest.raises(PathEscapeError):
        resolve_static_path(site, "/css/../../x")


def test_symlink_out_of_root_is_rejected(site, tmp_path_factory):
    elsewhere = tmp_path_factory.mktemp("elsewhere")
    (elsewhere / "leak.txt").write_text("secret", encoding="utf-8")
    os.symlink(elsewhere, site / "link")
    with pytest.raises(PathEscapeError):
        resolve_static_path(site, "/link/leak.txt")
    assert serve_static(site, "/link/leak.txt").status_code == 400


def test_null_byte_is_rejected(site):
    assert serve_static(site, "/index.html\x00.png").status_code == 400


def test_content_type_table():
    assert content_type_for(Path("a.JPG")) == "image/jpeg"
    assert content_type_for(Path("a.webp")) == "image/webp"
    assert content_type_for(Path("a.js")) == "application/javascript; charset=utf-8"
    assert content_type_for(Path("README")) == "application/octet-stream"


def test_read_failure_is_server_error(site, monkeypatch):
    def unreadable(self):
        raise PermissionError("denied")
    monkeypatch.setattr(Path, "read_bytes", unreadable)
    res = serve_static(site, "/css/site.css")
    assert res.status_code == 500
    assert res.body == b"Server error"


def test_read_failure_through_router(client, site, monkeypatch):
    def unreadable(self):
        raise OSError("disk gone")
    monkeypatch.setattr(Path, "read_bytes", unreadable)
    res = client.get("/index.html")
    assert res.status_code == 500
    assert res.text == "Server error"
    assert res.headers["cache-control"] == "no-cache, no-store, must-revalidate"


def test_encoded_traversal_never_leaves_root(client, site):
    (site.parent / "passwd").write_text("secret", encoding="utf-8")
    for path in ("/%2e%2e/passwd", "/%2e%2e/%2e%2e/etc/passwd", "/..%2fpasswd", "/..%2f..%2fetc%2fpasswd"):
        res = client.get(path)
        assert res.status_code in (400, 404)
        assert "secret" not in res.text
