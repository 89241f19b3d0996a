"""
Analytics counter tests: lazy singleton, atomic increments, daily ledger.
"""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest
from sqlalchemy import select, func

from devfolio.core import db
from devfolio.modules.analytics import CounterService
from devfolio.modules.analytics.models import Analytics, DailyView


def count_rows(app, model):
    with app.app_context():
        return db.session.execute(select(func.count()).select_from(model)).scalar()


# ---------------------------------------------------------------------------
# Singleton row
# ---------------------------------------------------------------------------

def test_project_click_on_fresh_database(app, client):
    assert count_rows(app, Analytics) == 0

    resp = client.post("/api/analytics/project-click")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["totalViews"] == 0
    assert data["projectClicks"] == 1
    assert data["contactInquiries"] == 0
    assert data["previousMonthViews"] == 0
    assert data["previousMonthClicks"] == 0
    assert data["previousMonthInquiries"] == 0

    assert count_rows(app, Analytics) == 1


def test_contact_inquiry_increments(client):
    client.post("/api/analytics/contact")
    data = client.post("/api/analytics/contact").get_json()
    assert data["contactInquiries"] == 2


def test_get_analytics_creates_zeroed_row(app, client, auth_headers):
    resp = client.get("/api/analytics", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"

    data = resp.get_json()
    assert data["id"] == 1
    assert data["totalViews"] == 0

    client.get("/api/analytics", headers=auth_headers)
    assert count_rows(app, Analytics) == 1


def test_view_increments_total_and_daily(client, auth_headers):
    resp = client.post("/api/analytics/view")
    assert resp.get_json() == {"success": True}

    data = client.get("/api/analytics", headers=auth_headers).get_json()
    assert data["totalViews"] == 1


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------

def test_concurrent_views_lose_no_updates(app):
    n = 100

    def hit():
        with app.app_context():
            CounterService.increment_view()

    with ThreadPoolExecutor(max_workers=10) as pool:
        for future in [pool.submit(hit) for _ in range(n)]:
            future.result()

    with app.app_context():
        analytics = db.session.get(Analytics, 1)
        daily = db.session.execute(select(DailyView)).scalars().all()

    assert analytics.total_views == n
    assert count_rows(app, Analytics) == 1
    assert len(daily) == 1
    assert daily[0].views == n


def test_concurrent_first_access_creates_one_row(app):
    def read():
        with app.app_context():
            return CounterService.get_analytics().id

    with ThreadPoolExecutor(max_workers=10) as pool:
        ids = list(pool.map(lambda _: read(), range(20)))

    assert set(ids) == {1}
    assert count_rows(app, Analytics) == 1


# ---------------------------------------------------------------------------
# Daily ledger
# ---------------------------------------------------------------------------

def test_same_day_views_share_one_row(app):
    with app.app_context():
        CounterService.increment_view()
        CounterService.increment_view()
        rows = db.session.execute(select(DailyView)).scalars().all()

    assert len(rows) == 1
    assert rows[0].date == CounterService.today()
    assert rows[0].views == 2


def test_views_on_different_days_get_separate_rows(app):
    with app.app_context():
        with patch.object(CounterService, "today", return_value="2024-03-01"):
            CounterService.increment_view()
        with patch.object(CounterService, "today", return_value="2024-03-02"):
            CounterService.increment_view()
            CounterService.increment_view()

        rows = {r.date: r.views for r in db.session.execute(select(DailyView)).scalars()}

    assert rows == {"2024-03-01": 1, "2024-03-02": 2}


def test_daily_views_returns_last_days_ascending(app, client, auth_headers):
    with app.app_context():
        for day, views in [("2024-01-01", 1), ("2024-01-02", 2), ("2024-01-03", 3),
                           ("2024-01-04", 4), ("2024-01-05", 5)]:
            db.session.add(DailyView(date=day, views=views))
        db.session.commit()

    resp = client.get("/api/analytics/daily-views?days=3", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.get_json()
    assert [r["date"] for r in data] == ["2024-01-03", "2024-01-04", "2024-01-05"]
    assert [r["views"] for r in data] == [3, 4, 5]


@pytest.mark.parametrize("raw, expected", [
    (None, 7),
    ("abc", 7),
    ("0", 7),
    ("-3", 7),
    ("30", 30),
    ("1000", 365),
])
def test_parse_days(raw, expected):
    assert CounterService.parse_days(raw) == expected


def test_daily_views_requires_auth(client):
    assert client.get("/api/analytics/daily-views").status_code == 401


# ---------------------------------------------------------------------------
# Manual overwrite
# ---------------------------------------------------------------------------

def test_put_analytics_changes_only_supplied_fields(client, auth_headers):
    client.post("/api/analytics/project-click")
    client.post("/api/analytics/project-click")
    client.post("/api/analytics/view")

    resp = client.put(
        "/api/analytics", json={"previousMonthViews": 120, "contactInquiries": 7}, headers=auth_headers
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["previousMonthViews"] == 120
    assert data["contactInquiries"] == 7
    assert data["projectClicks"] == 2
    assert data["totalViews"] == 1


def test_put_analytics_creates_missing_row(app, client, auth_headers):
    resp = client.put("/api/analytics", json={"totalViews": 42}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["totalViews"] == 42
    assert resp.get_json()["projectClicks"] == 0
    assert count_rows(app, Analytics) == 1


@pytest.mark.parametrize("body", [
    {"totalViews": -1},
    {"totalViews": "10"},
    {"totalViews": 2**70},
    {"projectClicks": 2**31},
    ["totalViews"],
])
def test_put_analytics_validation(client, auth_headers, body):
    resp = client.put("/api/analytics", json=body, headers=auth_headers)
    assert resp.status_code == 400


def test_put_analytics_accepts_largest_counter(client, auth_headers):
    resp = client.put("/api/analytics", json={"totalViews": 2**31 - 1}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["totalViews"] == 2**31 - 1


def test_increment_failure_returns_500(client):
    with patch.object(CounterService, "increment_view", side_effect=RuntimeError("db down")):
        resp = client.post("/api/analytics/view")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to increment view"}
