"""API tests through the FastAPI test client."""


def _add(client, roof_type="flat"):
    response = client.post("/api/building", json={"roof_type": roof_type})
    assert response.status_code == 200
    return response.json()


class TestSession:

    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}

    def test_shapes(self, client):
        shapes = client.get("/api/shapes").json()
        assert [s["id"] for s in shapes] == ["flat", "saddle", "hipped"]
        assert all(s["available"] for s in shapes)

    def test_empty_session(self, client):
        state = client.get("/api/session").json()
        assert state["building"] is None
        assert state["step"] == "define_building"

    def test_add_building(self, client):
        state = _add(client, "saddle")
        assert state["building"]["roofType"] == "saddle"
        assert state["target"] == "group"
        assert state["axes"] == {"show_x": True, "show_y": False, "show_z": True}
        assert state["drawing"]["phase"] == "empty"

    def test_unknown_roof_type(self, client):
        response = client.post("/api/building", json={"roof_type": "dome"})
        assert response.status_code == 422

    def test_no_building_is_a_conflict(self, client):
        response = client.post("/api/transform/mode", json={"mode": "rotate"})
        assert response.status_code == 409

    def test_map(self, client):
        info = client.post("/api/location", json={"lat": 0, "lng": 0}).json()
        assert info["platform"]["meters_per_pixel"] > 0
        assert "key=test-key" in info["image_url"]


class TestTransforms:

    def test_scale_drag_end(self, client):
        _add(client)
        client.post("/api/transform/mode", json={"mode": "scale"})
        assert client.post("/api/transform/start").status_code == 204
        body = client.post("/api/transform/end", json={
            "position": [0, 2.5, 0], "rotation": [0, 0, 0], "scale": [1.5, 1, 1],
        }).json()
        assert body["building"]["buildingWidth"] == 15
        assert body["building"]["buildingPosition"] == [0, 2.5, 0]
        assert body["node"]["scale"] == [1, 1, 1]

    def test_live_change(self, client):
        _add(client, "hipped")
        first = client.post("/api/transform/change", json={"position": [2, 0, 1]}).json()
        again = client.post("/api/transform/change", json={"position": [2, 0, 1]}).json()
        assert first["applied"] is True
        assert again["applied"] is False
        assert first["building"]["groupPosition"] == [2, 0, 1]

    def test_field_edits(self, client):
        _add(client)
        ok = client.post("/api/building/fields", json={"field": "buildingHeight", "value": "8"}).json()
        bad = client.post("/api/building/fields", json={"field": "buildingHeight", "value": "abc"}).json()
        assert ok["applied"] is True
        assert bad["applied"] is False
        assert bad["building"]["buildingHeight"] == 8

    def test_unknown_field(self, client):
        _add(client)
        response = client.post("/api/building/fields", json={"field": "roofRadius", "value": 2})
        assert response.status_code == 409


class TestRooftopObjects:

    def test_object_lifecycle(self, client):
        _add(client)
        client.post("/api/step", json={"step": "define_restrictions"})
        obj = client.post("/api/roof-objects").json()
        assert obj["position"] == [0, 5.25, 0]

        edited = client.patch(f"/api/roof-objects/{obj['id']}", json={"field": "positionX", "value": 99})
        assert edited.json()["building"]["roofObjects"][0]["position"][0] == 4.5

        dragged = client.post(f"/api/roof-objects/{obj['id']}/drag", json={
            "position": [1, 0, 2], "scale": [2, 1, 2],
        }).json()
        assert dragged["position"] == [1, 5.5, 2]

        state = client.delete(f"/api/roof-objects/{obj['id']}").json()
        assert state["building"]["roofObjects"] == []
        assert state["active_object_id"] is None

    def test_unknown_object(self, client):
        _add(client)
        client.post("/api/step", json={"step": "define_restrictions"})
        response = client.patch("/api/roof-objects/missing", json={"field": "width", "value": 2})
        assert response.status_code == 404


class TestDrawing:

    def test_click_in_wrong_step(self, client):
        _add(client)
        response = client.post("/api/drawing/click", json={"point": {"x": 0, "y": 5, "z": 0}})
        assert response.status_code == 409

    def test_draw_and_snapshot(self, client):
        _add(client)
        client.post("/api/step", json={"step": "define_layout"})
        for x, z in [(-3, -3), (3, -3), (3, 3), (-3, 3), (-3, -3)]:
            state = client.post("/api/drawing/click", json={"point": {"x": x, "y": 5, "z": z}}).json()
        assert state["drawing"]["phase"] == "finished"
        assert state["drawing"]["is_closed"] is True

        state = client.post("/api/drawing/segments/select", json={"index": 0}).json()
        assert state["drawing"]["selected_segment_length"] == 6
        resized = client.post("/api/drawing/segments/length", json={"length": 4}).json()
        assert resized["applied"] is True

        snapshot = client.get("/api/snapshot").json()
        assert snapshot["hasClosedLoopSystem"] is True
        assert snapshot["segments"][0]["length"] == 4

    def test_unknown_segment(self, client):
        _add(client)
        client.post("/api/step", json={"step": "define_layout"})
        response = client.post("/api/drawing/segments/select", json={"index": 3})
        assert response.status_code == 404
