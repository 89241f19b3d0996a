"""
Skills ordering and CRUD tests.
"""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest
from sqlalchemy import event, select

from devfolio.core import db
from devfolio.modules.skills import SkillService
from devfolio.modules.skills.models import Skill


def create(client, headers, name, level=50, **extra):
    resp = client.post("/api/skills", json={"name": name, "level": level, **extra}, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def orders_by_id(app):
    with app.app_context():
        return {s.id: s.order for s in db.session.execute(select(Skill)).scalars()}


# ---------------------------------------------------------------------------
# Creation puts new skills at the end
# ---------------------------------------------------------------------------

def test_first_skill_gets_order_zero(client, auth_headers):
    skill = create(client, auth_headers, "Python")
    assert skill["order"] == 0
    assert skill["category"] == "Other"


def test_new_skill_goes_after_max_order(app, client, auth_headers):
    with app.app_context():
        db.session.add(Skill(name="Existing", level=10, order=5))
        db.session.commit()

    skill = create(client, auth_headers, "Rust", category="Backend")
    assert skill["order"] == 6
    assert skill["category"] == "Backend"


def test_create_skill_validation(client, auth_headers):
    resp = client.post("/api/skills", json={"name": "", "level": 50}, headers=auth_headers)
    assert resp.status_code == 400

    resp = client.post("/api/skills", json={"name": "Go", "level": 101}, headers=auth_headers)
    assert resp.status_code == 400
    assert "level" in resp.get_json()["error"]


# ---------------------------------------------------------------------------
# Reorder
# ---------------------------------------------------------------------------

def test_create_then_reorder_end_to_end(client, auth_headers):
    a = create(client, auth_headers, "A")
    b = create(client, auth_headers, "B")
    assert (a["order"], b["order"]) == (0, 1)

    resp = client.post("/api/skills/reorder", json={"skillIds": [b["id"], a["id"]]}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}

    skills = client.get("/api/skills", headers=auth_headers).get_json()
    assert [s["name"] for s in skills] == ["B", "A"]
    assert [s["order"] for s in skills] == [0, 1]


@pytest.mark.parametrize("permutation", [
    [0, 1, 2, 3, 4],
    [4, 3, 2, 1, 0],
    [2, 0, 4, 1, 3],
])
def test_reorder_yields_requested_sequence(client, auth_headers, permutation):
    ids = [create(client, auth_headers, f"skill-{i}")["id"] for i in range(5)]
    requested = [ids[i] for i in permutation]

    resp = client.post("/api/skills/reorder", json={"skillIds": requested}, headers=auth_headers)
    assert resp.status_code == 200

    skills = client.get("/api/skills", headers=auth_headers).get_json()
    assert [s["id"] for s in skills] == requested


def test_reorder_ignores_unknown_ids(app, client, auth_headers):
    a = create(client, auth_headers, "A")
    b = create(client, auth_headers, "B")

    resp = client.post(
        "/api/skills/reorder", json={"skillIds": [9999, b["id"], a["id"]]}, headers=auth_headers
    )
    assert resp.status_code == 200

    orders = orders_by_id(app)
    assert orders == {b["id"]: 1, a["id"]: 2}


def test_reorder_ignores_ids_too_large_to_store(app, client, auth_headers):
    a = create(client, auth_headers, "A")
    b = create(client, auth_headers, "B")

    resp = client.post(
        "/api/skills/reorder", json={"skillIds": [2**70, b["id"], -2**70, a["id"]]}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    assert orders_by_id(app) == {b["id"]: 1, a["id"]: 3}


def test_reorder_duplicate_id_last_position_wins(app):
    with app.app_context():
        a = Skill(name="A", level=1, order=0)
        b = Skill(name="B", level=1, order=1)
        db.session.add_all([a, b])
        db.session.commit()
        a_id, b_id = a.id, b.id

        updated = SkillService.reorder([a_id, b_id, a_id])

    assert updated == 2
    assert orders_by_id(app) == {a_id: 2, b_id: 1}


def test_reorder_is_all_or_nothing(app, client, auth_headers):
    ids = [create(client, auth_headers, f"skill-{i}")["id"] for i in range(4)]
    before = orders_by_id(app)

    calls = {"updates": 0}

    def fail_on_third_update(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("UPDATE SKILLS"):
            calls["updates"] += 1
            if calls["updates"] == 3:
                raise RuntimeError("simulated failure")

    with app.app_context():
        engine = db.engine
    event.listen(engine, "before_cursor_execute", fail_on_third_update)
    try:
        resp = client.post(
            "/api/skills/reorder", json={"skillIds": list(reversed(ids))}, headers=auth_headers
        )
    finally:
        event.remove(engine, "before_cursor_execute", fail_on_third_update)

    assert calls["updates"] == 3
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to reorder skills"}
    assert orders_by_id(app) == before


@pytest.mark.parametrize("body", [
    {},
    {"skillIds": "1,2,3"},
    {"skillIds": [1, "2"]},
    {"skillIds": [True]},
])
def test_reorder_rejects_malformed_body(client, auth_headers, body):
    resp = client.post("/api/skills/reorder", json=body, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"].startswith("skillIds must")


def test_reorder_requires_auth(client):
    resp = client.post("/api/skills/reorder", json={"skillIds": []})
    assert resp.status_code == 401


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------

def test_update_skill(client, auth_headers):
    skill = create(client, auth_headers, "Flask", level=40)

    resp = client.patch(f"/api/skills/{skill['id']}", json={"level": 80}, headers=auth_headers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["level"] == 80
    assert data["name"] == "Flask"
    assert data["order"] == skill["order"]


def test_update_missing_skill(client, auth_headers):
    resp = client.patch("/api/skills/404", json={"level": 80}, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Skill not found"}


def test_delete_skill(client, auth_headers):
    skill = create(client, auth_headers, "Perl")

    resp = client.delete(f"/api/skills/{skill['id']}", headers=auth_headers)
    assert resp.status_code == 204

    resp = client.delete(f"/api/skills/{skill['id']}", headers=auth_headers)
    assert resp.status_code == 404


def test_service_get_skill(app):
    with app.app_context():
        skill = SkillService.create_skill({"name": "SQL", "level": 70})
        assert SkillService.get_skill(skill.id).name == "SQL"
        assert SkillService.get_skill(skill.id + 100) is None


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------

def test_concurrent_reorders_never_interleave(app):
    with app.app_context():
        ids = [SkillService.create_skill({"name": f"skill-{i}", "level": i}).id for i in range(6)]
    forward, backward = ids, list(reversed(ids))

    def run(sequence):
        with app.app_context():
            SkillService.reorder(sequence)

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(run, forward if i % 2 == 0 else backward) for i in range(16)]
        for future in futures:
            future.result()

    with app.app_context():
        final = [s.id for s in SkillService.list_skills()]
    assert final in (forward, backward)


def test_concurrent_creates_get_distinct_orders(app):
    def run(i):
        with app.app_context():
            return SkillService.create_skill({"name": f"skill-{i}", "level": 1}).order

    with ThreadPoolExecutor(max_workers=8) as pool:
        orders = list(pool.map(run, range(20)))

    assert sorted(orders) == list(range(20))


def test_create_takes_advisory_lock_on_postgres(app):
    with app.app_context():
        with patch("devfolio.modules.skills.service.Database.dialect_name", return_value="postgresql"), \
                patch.object(db.session, "execute") as mock_execute:
            SkillService.create_skill({"name": "Go", "level": 60})

        statement = str(mock_execute.call_args[0][0])
        assert "pg_advisory_xact_lock" in statement
        assert [s.name for s in SkillService.list_skills()] == ["Go"]
