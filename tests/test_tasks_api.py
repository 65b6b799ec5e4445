from datetime import timedelta

from fastapi.testclient import TestClient

from taskflow.main import app
from taskflow.utils.dates import local_today


def test_can_create_and_list_tasks():
    with TestClient(app) as client:
        # create
        payload = {"title": "Write CI and tests", "context": "@computer", "tags": ["dev"]}
        r = client.post("/tasks", json=payload)
        assert r.status_code == 200
        created = r.json()
        assert created["id"] >= 1
        assert created["title"] == payload["title"]
        assert created["status"] == "inbox"
        assert created["context"] == "@computer"
        assert created["tags"] == ["dev"]
        assert created["completed_at"] is None

        # list
        r = client.get("/tasks")
        assert r.status_code == 200
        items = r.json()
        assert isinstance(items, list)
        assert any(t["title"] == payload["title"] for t in items)

        r = client.get("/tasks", params={"context": "@computer"})
        assert all(t["context"] == "@computer" for t in r.json())
        assert any(t["id"] == created["id"] for t in r.json())


def test_rejects_unknown_enum_values():
    with TestClient(app) as client:
        assert client.post("/tasks", json={"title": "x", "status": "planned"}).status_code == 422
        assert client.post("/tasks", json={"title": "x", "context": "@office"}).status_code == 422
        assert client.post("/tasks", json={"title": "x", "priority": "P1"}).status_code == 422


def test_complete_and_move_track_completed_at():
    with TestClient(app) as client:
        task = client.post("/tasks", json={"title": "File taxes"}).json()

        r = client.post(f"/tasks/{task['id']}/complete")
        assert r.status_code == 200
        done = r.json()
        assert done["status"] == "done"
        assert done["completed_at"] is not None

        r = client.post(f"/tasks/{task['id']}/move", json={"status": "next"})
        assert r.status_code == 200
        moved = r.json()
        assert moved["status"] == "next"
        assert moved["completed_at"] is None

        r = client.get("/tasks", params={"status": "next"})
        assert any(t["id"] == task["id"] for t in r.json())


def test_update_and_delete_task():
    with TestClient(app) as client:
        task = client.post("/tasks", json={"title": "Old title"}).json()

        r = client.patch(f"/tasks/{task['id']}", json={"title": "New title", "waiting_for": "Sam", "status": "waiting"})
        assert r.status_code == 200
        body = r.json()
        assert body["title"] == "New title"
        assert body["waiting_for"] == "Sam"
        assert body["status"] == "waiting"

        assert client.delete(f"/tasks/{task['id']}").json() == {"deleted": True}
        assert client.get(f"/tasks/{task['id']}").status_code == 404


def test_missing_tasks_give_404():
    with TestClient(app) as client:
        assert client.get("/tasks/999999").status_code == 404
        assert client.patch("/tasks/999999", json={"title": "x"}).status_code == 404
        assert client.post("/tasks/999999/complete").status_code == 404
        assert client.post("/tasks/999999/move", json={"status": "next"}).status_code == 404
        assert client.delete("/tasks/999999").status_code == 404


def test_task_with_unknown_project_is_rejected():
    with TestClient(app) as client:
        r = client.post("/tasks", json={"title": "Orphan", "project_id": 999999})
        assert r.status_code == 400


def test_due_filters_skip_done_tasks():
    today = local_today()
    with TestClient(app) as client:
        late = client.post("/tasks", json={"title": "late", "due_date": str(today - timedelta(days=1))}).json()
        now = client.post("/tasks", json={"title": "now", "due_date": str(today)}).json()
        soon = client.post("/tasks", json={"title": "soon", "due_date": str(today + timedelta(days=2))}).json()
        finished = client.post(
            "/tasks", json={"title": "finished", "due_date": str(today - timedelta(days=1)), "status": "done"}
        ).json()

        def ids(due):
            r = client.get("/tasks", params={"due": due, "limit": 500})
            assert r.status_code == 200
            return {t["id"] for t in r.json()}

        overdue = ids("overdue")
        assert late["id"] in overdue
        assert now["id"] not in overdue
        assert finished["id"] not in overdue

        due_today = ids("today")
        assert now["id"] in due_today
        assert soon["id"] not in due_today

        due_soon = ids("soon")
        assert {now["id"], soon["id"]} <= due_soon
        assert late["id"] not in due_soon


def test_stats_count_buckets_and_open_due_tasks():
    today = local_today()
    with TestClient(app) as client:
        before = client.get("/tasks/stats").json()

        client.post("/tasks", json={"title": "stats inbox", "due_date": str(today)})
        client.post("/tasks", json={"title": "stats next", "status": "next", "due_date": str(today - timedelta(days=2))})
        client.post("/tasks", json={"title": "stats someday", "status": "someday"})
        client.post("/tasks", json={"title": "stats done", "status": "done", "due_date": str(today)})

        r = client.get("/tasks/stats")
        assert r.status_code == 200
        after = r.json()

        delta = {k: after[k] - before[k] for k in after}
        assert delta == {
            "inbox": 1,
            "next": 1,
            "waiting": 0,
            "someday": 1,
            "done": 1,
            "today": 1,
            "overdue": 1,
            "total": 4,
        }
