from fastapi.testclient import TestClient

from taskflow.main import app


def test_project_crud_and_progress():
    with TestClient(app) as client:
        r = client.post("/projects", json={"title": "Garden", "area_id": "personal", "outcome": "Veg beds planted"})
        assert r.status_code == 200, r.text
        project = r.json()
        assert project["status"] == "active"

        r = client.get(f"/projects/{project['id']}/progress")
        assert r.json() == {"project_id": project["id"], "total": 0, "done": 0, "percent": 0}

        ids = [
            client.post("/tasks", json={"title": f"step {n}", "project_id": project["id"]}).json()["id"]
            for n in range(3)
        ]
        client.post(f"/tasks/{ids[0]}/complete")

        r = client.get(f"/projects/{project['id']}/progress")
        assert r.json() == {"project_id": project["id"], "total": 3, "done": 1, "percent": 33}

        r = client.get("/tasks", params={"project_id": project["id"]})
        assert {t["id"] for t in r.json()} == set(ids)

        r = client.patch(f"/projects/{project['id']}", json={"status": "on-hold"})
        assert r.status_code == 200
        assert r.json()["status"] == "on-hold"

        r = client.patch(f"/projects/{project['id']}", json={"status": "completed"})
        assert r.json()["completed_at"] is not None


def test_deleting_project_keeps_its_tasks():
    with TestClient(app) as client:
        project = client.post("/projects", json={"title": "Short lived"}).json()
        task = client.post("/tasks", json={"title": "survivor", "project_id": project["id"]}).json()

        assert client.delete(f"/projects/{project['id']}").json() == {"deleted": True}
        assert client.get(f"/projects/{project['id']}").status_code == 404
        assert client.get(f"/projects/{project['id']}/progress").status_code == 404

        r = client.get(f"/tasks/{task['id']}")
        assert r.status_code == 200
        assert r.json()["project_id"] is None


def test_default_areas_are_seeded():
    with TestClient(app) as client:
        r = client.get("/areas")
        assert r.status_code == 200
        assert {a["id"] for a in r.json()} >= {"work", "personal", "health", "finance"}


def test_health_and_root():
    with TestClient(app) as client:
        assert client.get("/health").json()["status"] == "ok"
        assert client.get("/").json()["service"] == "taskflow"
