"""Users — a small JSON API on waypost.

Demonstrates path parameters, the parsed JSON body, first-match
ordering, and the empty 404 for unmatched requests. Storage is an
in-memory dict; a real app would hand handlers a database.

Run:
    python app.py
"""

from itertools import count
from typing import Any
from urllib.parse import parse_qs

from waypost import App, Response

app = App()

_users: dict[str, dict[str, Any]] = {}
_ids = count(1)


@app.route("GET", "/users")
def list_users(request, params, response):
    search = parse_qs(request.query_string).get("search", [""])[0].lower()
    users = [u for u in _users.values() if search in str(u["name"]).lower()]
    response.write(Response.json(users))


# Registered before /users/:id, otherwise ":id" would swallow "me"
@app.route("GET", "/users/me")
def current_user(request, params, response):
    response.write(Response.json({"id": "anonymous"}))


@app.route("POST", "/users")
def create_user(request, params, response):
    body = request.body
    if not isinstance(body, dict) or not body.get("name"):
        response.write(Response.json({"error": "name is required"}, status=400))
        return
    user_id = str(next(_ids))
    user = {"id": user_id, "name": body["name"], "email": body.get("email"), "groups": []}
    _users[user_id] = user
    response.write(Response.json(user, status=201))


@app.route("GET", "/users/:id")
def get_user(request, params, response):
    user = _users.get(params["id"])
    if user is None:
        response.write_head(404).end()
        return
    response.write(Response.json(user))


@app.route("DELETE", "/users/:id")
def delete_user(request, params, response):
    if _users.pop(params["id"], None) is None:
        response.write_head(404).end()
        return
    response.write_head(204).end()


@app.route("PUT", "/users/:userId/groups/:groupId")
async def join_group(request, params, response):
    user = _users.get(params["userId"])
    if user is None:
        response.write_head(404).end()
        return
    groups: list[str] = user["groups"]
    if params["groupId"] not in groups:
        groups.append(params["groupId"])
    response.write(Response.json(user))


@app.route("GET", "/users/:userId/groups/:groupId")
def get_membership(request, params, response):
    user = _users.get(params["userId"])
    member = user is not None and params["groupId"] in user["groups"]
    response.write(Response.json({**params, "member": member}))


if __name__ == "__main__":
    app.run(port=3333)
