import pytest


@pytest.fixture
def habit(client, user):
    response = client.post(
        "/habits", json={"title": "Read", "description": "30 minutes", "userId": user.id}
    )
    assert response.status_code == 201
    return response.get_json()


def test_create_habit(habit, user):
    assert habit["title"] == "Read"
    assert habit["description"] == "30 minutes"
    assert habit["userId"] == user.id
    assert habit["completions"] == []


@pytest.mark.parametrize("payload", [{"title": "Read"}, {"userId": 1}, {"title": "", "userId": 1}])
def test_create_habit_requires_title_and_user(client, user, payload):
    assert client.post("/habits", json=payload).status_code == 400


def test_list_habits(client, user, habit):
    second = client.post("/habits", json={"title": "Walk", "userId": user.id}).get_json()
    response = client.get(f"/habits?userId={user.id}")
    assert response.status_code == 200
    assert [h["id"] for h in response.get_json()] == [second["id"], habit["id"]]


def test_list_habits_empty_and_missing_user_id(client, user):
    assert client.get(f"/habits?userId={user.id}").get_json() == []
    assert client.get("/habits").status_code == 400


def test_get_update_delete_habit(client, habit):
    assert client.get(f"/habits/{habit['id']}").get_json()["title"] == "Read"
    response = client.patch(f"/habits/{habit['id']}", json={"description": "An hour"})
    assert response.status_code == 200
    assert response.get_json()["title"] == "Read"
    assert response.get_json()["description"] == "An hour"
    assert client.delete(f"/habits/{habit['id']}").status_code == 200
    assert client.get(f"/habits/{habit['id']}").status_code == 404
    assert client.patch(f"/habits/{habit['id']}", json={"title": "x"}).status_code == 404
    assert client.delete(f"/habits/{habit['id']}").status_code == 404


def test_mark_and_unmark_completion(client, user, habit):
    url = f"/habits/{habit['id']}/completions"
    response = client.post(url, json={"userId": user.id, "date": "2024-01-05T23:59:00Z"})
    assert response.status_code == 201
    assert response.get_json()["date"] == "2024-01-05"
    assert response.get_json()["habitId"] == habit["id"]

    duplicate = client.post(url, json={"userId": user.id, "date": "2024-01-05T00:00:01Z"})
    assert duplicate.status_code == 409
    assert len(client.get(f"/habits/{habit['id']}").get_json()["completions"]) == 1

    removed = client.delete(f"{url}?userId={user.id}&date=2024-01-05T00:00:01Z")
    assert removed.status_code == 200
    assert client.get(f"/habits/{habit['id']}").get_json()["completions"] == []
    assert client.delete(f"{url}?userId={user.id}&date=2024-01-05").status_code == 404


def test_completion_missing_fields(client, user, habit):
    url = f"/habits/{habit['id']}/completions"
    assert client.post(url, json={"userId": user.id}).status_code == 400
    assert client.post(url, json={"date": "2024-01-05"}).status_code == 400
    assert client.post(url, json={"userId": user.id, "date": "soon"}).status_code == 400
    assert client.delete(f"{url}?userId={user.id}").status_code == 400
    assert client.delete(f"{url}?date=2024-01-05").status_code == 400


def test_complete_missing_habit(client, user):
    response = client.post("/habits/999/completions", json={"userId": user.id, "date": "2024-01-05"})
    assert response.status_code == 404


def test_non_object_json_body_is_rejected(client, user, habit):
    assert client.post("/habits", json=[1, 2]).status_code == 400
    assert client.patch(f"/habits/{habit['id']}", json=["Walk"]).status_code == 400
    response = client.post(f"/habits/{habit['id']}/completions", json=[user.id, "2024-01-05"])
    assert response.status_code == 400
    assert response.get_json() == {"message": "Request body must be a JSON object"}


def test_create_habit_with_non_string_fields(client, user):
    assert client.post("/habits", json={"title": ["Read"], "userId": user.id}).status_code == 400
    response = client.post(
        "/habits", json={"title": "Read", "description": {"x": 1}, "userId": user.id}
    )
    assert response.status_code == 400
    assert client.get(f"/habits?userId={user.id}").get_json() == []


def test_patch_null_description_clears_it(client, habit):
    response = client.patch(f"/habits/{habit['id']}", json={"title": "Read more"})
    assert response.get_json()["description"] == "30 minutes"
    response = client.patch(f"/habits/{habit['id']}", json={"description": None})
    assert response.status_code == 200
    assert response.get_json()["description"] is None
    assert response.get_json()["title"] == "Read more"
