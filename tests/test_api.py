import pytest
from fastapi.testclient import TestClient

from cocktailbot import main
from cocktailbot.main import create_app
from cocktailbot.ws.manager import ws_manager

from conftest import SUNRISE, TEST_PUMPS


@pytest.fixture
def client(settings, pump_driver, lighting_driver):
    app = create_app(settings, pump_driver=pump_driver, lighting_driver=lighting_driver)
    container = app.state.container
    container.pumps.save(TEST_PUMPS)
    container.recipes.save(SUNRISE)
    # the replay buffer is process wide
    ws_manager._history.clear()
    with TestClient(app) as c:
        yield c


def test_create_app_configures_logging(settings, pump_driver, lighting_driver, monkeypatch):
    levels = []
    monkeypatch.setattr(main, "setup_logging", levels.append)

    main.create_app(settings.model_copy(update={"LOG_LEVEL": "DEBUG"}),
                    pump_driver=pump_driver, lighting_driver=lighting_driver)
    assert levels == ["DEBUG"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "state": "idle"}


def test_startup_sets_idle_lighting(client, lighting_driver):
    assert lighting_driver.commands == ["RAINBOW 30"]


def test_prepare(client, pump_driver):
    resp = client.post("/api/v1/control/prepare", json={"cocktailId": "test-sunrise", "sizeMl": 300})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Test Sunrise (300 ml) is ready!"
    assert len(body["dispensed"]) == 3
    assert len(pump_driver.calls) == 3

    stats = client.get("/api/v1/stats/summary").json()
    assert stats["total"] == 1
    assert stats["top"][0]["cocktailId"] == "test-sunrise"


def test_prepare_insufficient(client, pump_driver):
    client.put("/api/v1/ingredients/levels/juice", json={"amount": 50})
    resp = client.post("/api/v1/control/prepare", json={"cocktailId": "test-sunrise"})
    assert resp.status_code == 409
    assert resp.json()["error"] == "InsufficientIngredientsError"
    assert resp.json()["ingredientIds"] == ["juice"]
    assert pump_driver.calls == []


def test_prepare_unknown_and_inactive(client):
    assert client.post("/api/v1/control/prepare", json={"cocktailId": "nope"}).status_code == 404

    client.patch("/api/v1/cocktails/test-sunrise/active", json={"isActive": False})
    resp = client.post("/api/v1/control/prepare", json={"cocktailId": "test-sunrise"})
    assert resp.status_code == 409
    assert resp.json()["error"] == "InactiveError"


def test_prepare_bad_size(client):
    resp = client.post("/api/v1/control/prepare", json={"cocktailId": "test-sunrise", "sizeMl": 0})
    assert resp.status_code == 422


def test_hardware_failure_maps_to_502(client, pump_driver):
    pump_driver.fail_pins.add(17)
    resp = client.post("/api/v1/control/prepare", json={"cocktailId": "test-sunrise"})
    assert resp.status_code == 502
    assert resp.json()["error"] == "HardwareError"


def test_shot_uses_default_amount(client, pump_driver):
    resp = client.post("/api/v1/control/shot", json={"ingredientId": "vodka"})
    assert resp.status_code == 200
    assert pump_driver.calls == [(23, 2000)]


def test_status_and_cancel_when_idle(client):
    assert client.get("/api/v1/control/status").json()["state"] == "idle"
    assert client.post("/api/v1/control/cancel").json() == {"cancelRequested": False}


def test_cocktail_crud(client):
    resp = client.post("/api/v1/cocktails/", json={
        "name": "Screwdriver",
        "recipe": [
            {"ingredientId": "vodka", "amount": 50},
            {"ingredientId": "orange-juice", "amount": 150},
        ],
    })
    assert resp.status_code == 201
    created = resp.json()
    assert created["id"].startswith("custom-")
    assert created["ingredients"] == ["50ml Vodka", "150ml Orange Juice"]

    cid = created["id"]
    assert client.get(f"/api/v1/cocktails/{cid}").json()["name"] == "Screwdriver"

    created["name"] = "Screwdriver XL"
    assert client.put(f"/api/v1/cocktails/{cid}", json=created).json()["name"] == "Screwdriver XL"
    assert client.put("/api/v1/cocktails/other", json=created).status_code == 422

    assert client.delete(f"/api/v1/cocktails/{cid}").status_code == 204
    assert client.get(f"/api/v1/cocktails/{cid}").status_code == 404


def test_cocktail_list_hides_inactive_on_request(client):
    client.patch("/api/v1/cocktails/zombie/active", json={"isActive": False})
    ids = [c["id"] for c in client.get("/api/v1/cocktails/", params={"include_inactive": False}).json()]
    assert "zombie" not in ids
    assert "test-sunrise" in ids


def test_levels_endpoints(client):
    levels = client.get("/api/v1/ingredients/levels").json()
    assert {lvl["ingredientId"] for lvl in levels} == {"rum", "juice", "grenadine", "vodka"}

    assert client.put("/api/v1/ingredients/levels/rum", json={"amount": 60}).json()["currentAmount"] == 60
    low = client.get("/api/v1/ingredients/levels", params={"low": True}).json()
    assert [lvl["ingredientId"] for lvl in low] == ["rum"]

    refilled = client.post("/api/v1/ingredients/levels/rum/refill", json={"amount": 100}).json()
    assert refilled["currentAmount"] == 160

    capped = client.put("/api/v1/ingredients/levels/rum/capacity", json={"capacity": 100}).json()
    assert capped == {"ingredientId": "rum", "currentAmount": 100, "capacity": 100}

    assert client.put("/api/v1/ingredients/levels/rum", json={"amount": -5}).status_code == 422
    assert client.put("/api/v1/ingredients/levels/absinthe", json={"amount": 5}).status_code == 404

    everything = client.post("/api/v1/ingredients/levels/refill-all").json()
    assert all(lvl["currentAmount"] == lvl["capacity"] for lvl in everything)


def test_add_ingredient(client):
    resp = client.post("/api/v1/ingredients/", json={"name": "Blue Curacao", "alcoholic": True})
    assert resp.status_code == 201
    assert resp.json()["id"] == "custom-blue-curacao"
    ids = [i["id"] for i in client.get("/api/v1/ingredients/").json()]
    assert "custom-blue-curacao" in ids
    assert client.post("/api/v1/ingredients/", json={"name": "Blue Curacao"}).status_code == 422


def test_pump_config_endpoints(client):
    pumps = client.get("/api/v1/pumps/").json()
    assert [p["pin"] for p in pumps] == [17, 27, 22, 23]

    pumps.append({"id": 5, "ingredient": "gin", "pin": 5, "flowRate": 2.0, "enabled": True})
    assert client.put("/api/v1/pumps/", json=pumps).status_code == 200
    assert client.get("/api/v1/ingredients/levels").status_code == 200
    assert "gin" in [lvl["ingredientId"] for lvl in client.get("/api/v1/ingredients/levels").json()]

    pumps.append({"id": 6, "ingredient": "gin", "pin": 6, "flowRate": 2.0, "enabled": True})
    assert client.put("/api/v1/pumps/", json=pumps).status_code == 422


def test_pump_activate_and_calibrate(client, pump_driver):
    resp = client.post("/api/v1/pumps/1/activate", json={"durationMs": 1000, "purpose": "calibrate"})
    assert resp.status_code == 200
    assert pump_driver.calls == [(17, 1000)]

    resp = client.post("/api/v1/pumps/1/calibrate", json={"measuredMl": 12, "durationMs": 10000})
    assert resp.json()["flowRate"] == 1.2

    assert client.post("/api/v1/pumps/99/activate", json={"durationMs": 1000}).status_code == 404


def test_stats_reset(client):
    client.post("/api/v1/control/prepare", json={"cocktailId": "test-sunrise"})
    assert len(client.get("/api/v1/stats/").json()) == 1
    assert client.delete("/api/v1/stats/test-sunrise").status_code == 204
    assert client.get("/api/v1/stats/").json() == []


def test_lighting_endpoints(client, lighting_driver):
    config = client.get("/api/v1/lighting/config").json()
    assert config["cocktailPreparation"] == {"color": "#ff0000", "blinking": True}

    config["idleMode"] = {"scheme": "static", "colors": ["#0000ff"]}
    assert client.put("/api/v1/lighting/config", json=config).status_code == 200
    assert lighting_driver.commands[-1] == "COLOR 0 0 255"

    resp = client.post("/api/v1/lighting/control", json={"mode": "color", "color": "#00ff00", "brightness": 50})
    assert resp.json() == {"success": True, "mode": "color"}
    assert lighting_driver.commands[-2:] == ["BRIGHT 50", "COLOR 0 255 0"]

    assert client.post("/api/v1/lighting/control", json={"mode": "strobe"}).status_code == 422


def test_events_reach_websocket(client):
    with client.websocket_connect("/ws/admin") as ws:
        client.post("/api/v1/control/shot", json={"ingredientId": "vodka", "amountMl": 20})
        types = [ws.receive_json()["type"] for _ in range(2)]
    assert types == ["preparation_started", "preparation_finished"]
