"""Request helpers shared by the API feature tests."""

from typing import Dict

REGISTER_URL = "/api/v1/users/register"
LOGIN_URL = "/api/v1/users/login"


async def register(client, username="alice", email="a@x.com", password="p1", full_name="Alice Liddell", cover=False):
    files = {"avatar": ("avatar.png", b"\x89PNG avatar bytes", "image/png")}
    if cover:
        files["coverImage"] = ("cover.png", b"\x89PNG cover bytes", "image/png")
    data = {"username": username, "email": email, "fullName": full_name, "password": password}
    return await client.post(REGISTER_URL, data=data, files=files)


async def login(client, password="p1", **identity):
    return await client.post(LOGIN_URL, json={"password": password, **identity})


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def set_cookies(response) -> Dict[str, str]:
    """Map cookie name to its raw Set-Cookie header."""
    return {header.split("=", 1)[0]: header for header in response.headers.get_list("set-cookie")}
