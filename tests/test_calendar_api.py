"""API tests for the calendar and notification endpoints."""

import pytest


async def create(client, **fields) -> dict:
    response = await client.post("/api/v1/jobs", json={"title": "Guard the Caravan", **fields})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_get_calendar(client):
    response = await client.get("/api/v1/calendar")
    assert response.json() == {"current_day": 10}


@pytest.mark.asyncio
async def test_advance_expires_overdue_jobs(client):
    job = await create(
        client,
        duration_availability=2,
        reputation_impacts=[
            {"target_type": "Faction", "target_entity": "Caravan Guild", "value": -4, "condition": "OnExpiration"}
        ],
    )

    response = await client.post("/api/v1/calendar/advance", json={"days": 2})
    assert response.json() == {"from_day": 10, "to_day": 12, "current_day": 12}
    assert (await client.get(f"/api/v1/jobs/{job['job_id']}")).json()["status"] == "Posted"

    await client.post("/api/v1/calendar/advance", json={"days": 1})
    expired = (await client.get(f"/api/v1/jobs/{job['job_id']}")).json()
    assert expired["status"] == "Expired"
    assert expired["days_remaining"] is None
    assert expired["days_remaining_text"] is None

    reputation = (await client.get("/api/v1/reputation")).json()
    assert reputation == [{"target_type": "Faction", "target_entity": "Caravan Guild", "value": -4}]

    notices = (await client.get("/api/v1/notifications")).json()
    titles = {notice["title"] for notice in notices}
    assert "Job Expired" in titles
    assert "Job Deadline Approaching" in titles


@pytest.mark.asyncio
async def test_advance_requires_positive_days(client):
    response = await client.post("/api/v1/calendar/advance", json={"days": 0})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert (await client.get("/api/v1/calendar")).json()["current_day"] == 10


@pytest.mark.asyncio
async def test_check_expirations_without_advancing(client):
    job = await create(client, post_date=0, duration_availability=3)

    response = await client.post("/api/v1/calendar/check-expirations")

    assert response.status_code == 200
    assert response.json()["expired"] == [job["job_id"]]
    assert (await client.get("/api/v1/calendar")).json()["current_day"] == 10


@pytest.mark.asyncio
async def test_mark_notification_read(client):
    await create(client, post_date=0, duration_availability=3)
    await client.post("/api/v1/calendar/check-expirations")

    [notice] = (await client.get("/api/v1/notifications", params={"unread_only": "true"})).json()
    response = await client.post(f"/api/v1/notifications/{notice['notification_id']}/read")
    assert response.json()["read"] is True
    assert (await client.get("/api/v1/notifications", params={"unread_only": "true"})).json() == []

    missing = await client.post("/api/v1/notifications/ntf_missing/read")
    assert missing.status_code == 404
