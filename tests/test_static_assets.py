from chat_relay.core.assets import StaticAssets
from chat_relay.server import app


def _serve_from(monkeypatch, directory):
    monkeypatch.setattr(app.state, "assets", StaticAssets(str(directory)))


def test_root_serves_index(client, monkeypatch, provider, tmp_path):
    (tmp_path / "index.html").write_text("<h1>chat</h1>", encoding="utf-8")
    _serve_from(monkeypatch, tmp_path)

    r = client.get("/")

    assert r.status_code == 200
    assert r.text == "<h1>chat</h1>"
    assert r.headers["content-type"].startswith("text/html")
    assert provider.calls == []


def test_nested_asset(client, monkeypatch, tmp_path):
    (tmp_path / "js").mkdir()
    (tmp_path / "js" / "chat.js").write_text("console.log('hi')", encoding="utf-8")
    _serve_from(monkeypatch, tmp_path)

    r = client.get("/js/chat.js")

    assert r.status_code == 200
    assert r.text == "console.log('hi')"


def test_missing_asset_is_404(client, monkeypatch, tmp_path):
    _serve_from(monkeypatch, tmp_path)

    r = client.get("/nope.css")

    assert r.status_code == 404


def test_missing_directory_is_404(client, monkeypatch, tmp_path):
    _serve_from(monkeypatch, tmp_path / "does-not-exist")

    r = client.get("/")

    assert r.status_code == 404
