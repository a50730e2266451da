from __future__ import annotations

import asyncio

import pytest

from tasklist.adapters.todo_repository_redis import RedisTodoRepository


def _seed(fake_redis, *texts: str) -> list[int]:
    repo = RedisTodoRepository(fake_redis)
    return [asyncio.run(repo.create(text)).id for text in texts]


def test_index_renders_tasks(client, fake_redis) -> None:
    _seed(fake_redis, "first task", "second task")

    resp = client.get("/")

    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert resp.text.index("first task") < resp.text.index("second task")


def test_index_shows_error_banner(client) -> None:
    resp = client.get("/?error=empty")
    assert resp.status_code == 200
    assert "Task text cannot be empty." in resp.text


def test_index_survives_unreachable_store(client, fake_redis) -> None:
    fake_redis.fail_on = {"lrange"}
    resp = client.get("/")
    assert resp.status_code == 200
    assert "No tasks yet." in resp.text


def test_add_creates_trimmed_task(client, fake_redis) -> None:
    resp = client.post("/add", data={"task": "  call mom  "})

    assert resp.status_code == 303
    assert resp.headers["location"] == "/"
    assert fake_redis.hashes["todo:1"]["task"] == "call mom"


def test_add_blank_text_is_rejected(client, fake_redis) -> None:
    for payload in ({"task": ""}, {"task": "   "}):
        resp = client.post("/add", data=payload)
        assert resp.headers["location"] == "/?error=empty"
    assert fake_redis.hashes == {}
    assert fake_redis.counters == {}


def test_add_store_failure_redirects_with_marker(client, fake_redis) -> None:
    fake_redis.fail_on = {"incr"}
    resp = client.post("/add", data={"task": "x"})
    assert resp.headers["location"] == "/?error=add"


def test_toggle_flips_completion(client, fake_redis) -> None:
    [todo_id] = _seed(fake_redis, "toggle me")

    client.post(f"/toggle/{todo_id}")
    assert fake_redis.hashes[f"todo:{todo_id}"]["completed"] == "true"

    resp = client.post(f"/toggle/{todo_id}")
    assert resp.headers["location"] == "/"
    assert fake_redis.hashes[f"todo:{todo_id}"]["completed"] == "false"


def test_toggle_unknown_id_is_noop(client, fake_redis) -> None:
    resp = client.post("/toggle/77")
    assert resp.headers["location"] == "/"
    assert fake_redis.hashes == {}


def test_toggle_write_failure_redirects_with_marker(client, fake_redis) -> None:
    [todo_id] = _seed(fake_redis, "a")
    fake_redis.fail_on = {"hset"}
    resp = client.post(f"/toggle/{todo_id}")
    assert resp.headers["location"] == "/?error=toggle"


def test_edit_replaces_text(client, fake_redis) -> None:
    [todo_id] = _seed(fake_redis, "old")
    resp = client.post(f"/edit/{todo_id}", data={"task": " new "})

    assert resp.headers["location"] == "/"
    assert fake_redis.hashes[f"todo:{todo_id}"]["task"] == "new"
    assert fake_redis.hashes[f"todo:{todo_id}"]["completed"] == "false"


def test_edit_blank_text_leaves_store_unchanged(client, fake_redis) -> None:
    [todo_id] = _seed(fake_redis, "keep me")
    before = dict(fake_redis.hashes[f"todo:{todo_id}"])

    resp = client.post(f"/edit/{todo_id}", data={"task": "  "})

    assert resp.headers["location"] == "/?error=empty"
    assert fake_redis.hashes[f"todo:{todo_id}"] == before


def test_edit_write_failure_redirects_with_marker(client, fake_redis) -> None:
    [todo_id] = _seed(fake_redis, "a")
    fake_redis.fail_on = {"hset"}
    resp = client.post(f"/edit/{todo_id}", data={"task": "b"})
    assert resp.headers["location"] == "/?error=update"


def test_delete_removes_task(client, fake_redis) -> None:
    first, second = _seed(fake_redis, "one", "two")

    resp = client.post(f"/delete/{first}")

    assert resp.headers["location"] == "/"
    assert f"todo:{first}" not in fake_redis.hashes
    assert fake_redis.lists["todos:list"] == [str(second)]


def test_delete_failure_redirects_with_marker(client, fake_redis) -> None:
    fake_redis.fail_on = {"delete"}
    resp = client.post("/delete/1")
    assert resp.headers["location"] == "/?error=delete"


@pytest.mark.parametrize("path", ["/toggle/abc", "/delete/abc", "/delete/-1", "/toggle/1.5"])
def test_non_numeric_id_redirects_without_touching_store(client, fake_redis, path) -> None:
    resp = client.post(path)

    assert resp.status_code == 303
    assert resp.headers["location"] == "/"
    assert fake_redis.calls == []


def test_edit_non_numeric_id_redirects(client, fake_redis) -> None:
    resp = client.post("/edit/abc", data={"task": "new"})

    assert resp.status_code == 303
    assert resp.headers["location"] == "/"
    assert fake_redis.calls == []


def test_index_shows_not_ready_banner_when_store_down(client, fake_redis) -> None:
    _seed(fake_redis, "hidden")
    fake_redis.fail_on = {"ping", "lrange", "hgetall"}

    resp = client.get("/")

    assert resp.status_code == 200
    assert "Redis connection not ready. Please wait..." in resp.text
    assert "hidden" not in resp.text


def test_index_lists_good_tasks_next_to_unreadable_record(client, fake_redis) -> None:
    _seed(fake_redis, "good task")
    fake_redis.hashes["todo:9"] = {"id": "9", "task": "legacy"}
    fake_redis.lists["todos:list"].append("9")

    resp = client.get("/")

    assert resp.status_code == 200
    assert "good task" in resp.text
    assert "Failed to load tasks" not in resp.text


def test_wrong_method_is_plain_404(client) -> None:
    resp = client.get("/add")
    assert resp.status_code == 404
    assert resp.text == "Page not found"


def test_superscript_digit_id_redirects(client, fake_redis) -> None:
    resp = client.post("/toggle/%C2%B2")
    assert resp.headers["location"] == "/"
    assert fake_redis.calls == []
