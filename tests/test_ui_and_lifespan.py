from fastapi import FastAPI
from fastapi.testclient import TestClient

from reggie.main import mount_ui


def test_static_ui_served_at_root(tmp_path):
    (tmp_path / "index.html").write_text("<h1>reggie ui</h1>", encoding="utf-8")
    (tmp_path / "app.js").write_text("console.log('ok')", encoding="utf-8")

    ui_app = FastAPI()

    @ui_app.get("/health")
    async def health():
        return {"status": "ok"}

    assert mount_ui(ui_app, str(tmp_path)) is True
    c = TestClient(ui_app)

    r = c.get("/")
    assert r.status_code == 200
    assert "reggie ui" in r.text
    assert c.get("/app.js").text == "console.log('ok')"
    # routes declared before the mount still win
    assert c.get("/health").json() == {"status": "ok"}


def test_missing_static_dir_is_not_mounted(tmp_path):
    ui_app = FastAPI()
    assert mount_ui(ui_app, None) is False
    assert mount_ui(ui_app, str(tmp_path / "nope")) is False
    assert TestClient(ui_app).get("/").status_code == 404


def test_lifespan_exit_shuts_down_publisher(app, publisher, order_message):
    with TestClient(app) as c:
        r = c.post("/publish", json={"className": "OrderCreated", "topic": "orders", "message": order_message})
        assert r.status_code == 200
        assert publisher.topics() == ["orders"]
    assert publisher.topics() == []
