"""End-to-end checks of bearer attachment and the refresh-and-retry flow."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from clean_client.core.errors import NetworkError, UnauthorizedError
from clean_client.models import AuthStatus, Authorized, Credential, Profile, Unauthorized


@pytest.mark.asyncio
async def test_login_stores_pair_and_authenticates_later_calls(context, backend) -> None:
    backend.scripted_pairs.append(("t1", "r1"))

    await context.session.login("bob", "pw")
    await context.users.get_user("u1")

    assert context.session.current_credential() == Credential(access_token="t1", refresh_token="r1")
    assert backend.auth_headers("/auth/login") == [None]
    assert backend.auth_headers("/users/u1") == ["Bearer t1"]


@pytest.mark.asyncio
async def test_expired_token_is_refreshed_and_request_retried(context, backend) -> None:
    backend.scripted_pairs.extend([("t1", "r1"), ("t2", "r2")])
    await context.session.login("bob", "pw")
    backend.calls.clear()
    backend.expire("t1")

    user = await context.users.get_user("u1")

    assert user.username == "bob"
    assert backend.paths() == ["/users/u1", "/auth/refresh-token", "/users/u1"]
    assert backend.auth_headers("/users/u1") == ["Bearer t1", "Bearer t2"]
    assert backend.auth_headers("/auth/refresh-token") == [None]
    assert context.session.current_credential() == Credential(access_token="t2", refresh_token="r2")
    assert context.credential_store.load() == Credential(access_token="t2", refresh_token="r2")


@pytest.mark.asyncio
async def test_failed_refresh_signs_out(context, backend) -> None:
    await context.session.login("bob", "pw")
    backend.expire(context.session.current_credential().access_token)
    backend.refresh_fails = True
    backend.calls.clear()

    with pytest.raises(UnauthorizedError):
        await context.users.get_user("u1")

    assert backend.paths() == ["/users/u1", "/auth/refresh-token"]
    assert context.session.current_credential() is None
    assert context.credentials.status.value is AuthStatus.UNAUTHORIZED
    assert isinstance(context.session.state, Unauthorized)
    assert not context.credential_store.is_authorized()


@pytest.mark.asyncio
async def test_retry_is_not_refreshed_twice(context, backend) -> None:
    await context.session.login("bob", "pw")
    backend.expire(context.session.current_credential().access_token)
    # The refresh succeeds but the new token is rejected as well.
    backend.scripted_pairs.append(("t-bad", "r-bad"))
    original_issue = backend.issue_pair

    def issue_unusable(username: str):
        pair = original_issue(username)
        backend.expire(pair["accessToken"])
        return pair

    backend.issue_pair = issue_unusable
    backend.calls.clear()

    with pytest.raises(UnauthorizedError):
        await context.users.get_user("u1")

    assert backend.paths().count("/auth/refresh-token") == 1
    assert backend.paths().count("/users/u1") == 2


@pytest.mark.asyncio
async def test_requests_without_credential_carry_no_header(context, backend) -> None:
    with pytest.raises(UnauthorizedError):
        await context.users.get_user("u1")

    assert backend.auth_headers("/users/u1") == [None]
    assert "/auth/refresh-token" not in backend.paths()


@pytest.mark.asyncio
async def test_refresh_transport_failure_keeps_credential(context, backend) -> None:
    await context.session.login("bob", "pw")
    credential = context.session.current_credential()
    backend.expire(credential.access_token)

    async def drop_refresh(request: httpx.Request) -> None:
        if request.url.path.endswith("/auth/refresh-token"):
            raise httpx.ConnectError("offline", request=request)

    context.api_client._client.event_hooks["request"].append(drop_refresh)

    with pytest.raises(NetworkError):
        await context.users.get_user("u1")

    assert context.session.current_credential() == credential


@pytest.mark.asyncio
async def test_concurrent_expiry_keeps_the_winning_refresh(context, backend) -> None:
    backend.scripted_pairs.extend([("t1", "r1"), ("t2", "r2"), ("t3", "r3")])
    await context.session.login("bob", "pw")
    backend.expire("t1")
    backend.calls.clear()

    user, users = await asyncio.gather(
        context.users.get_user("u1"), context.users.list_users()
    )

    assert user.username == "bob"
    assert [item.id for item in users] == ["u1"]
    assert context.session.current_credential() == Credential(access_token="t2", refresh_token="r2")
    assert context.credential_store.load() == Credential(access_token="t2", refresh_token="r2")
    assert context.session.state == Authorized(profile=Profile(username="bob"))
    assert backend.auth_headers("/users/u1")[-1] == "Bearer t2"
    assert backend.auth_headers("/users")[-1] == "Bearer t2"


@pytest.mark.asyncio
async def test_rejected_refresh_retries_with_credential_stored_meanwhile(context, backend) -> None:
    backend.scripted_pairs.append(("t1", "r1"))
    await context.session.login("bob", "pw")
    backend.expire("t1")
    backend.calls.clear()
    rotated = Credential(access_token="t2", refresh_token="r2")

    async def rotate_elsewhere(request: httpx.Request) -> None:
        if request.url.path.endswith("/auth/refresh-token"):
            backend.grant("t2", "r2")
            backend.refresh_fails = True
            context.credentials.update(rotated)

    context.api_client._client.event_hooks["request"].append(rotate_elsewhere)

    user = await context.users.get_user("u1")

    assert user.id == "u1"
    assert backend.paths() == ["/users/u1", "/auth/refresh-token", "/users/u1"]
    assert backend.auth_headers("/users/u1") == ["Bearer t1", "Bearer t2"]
    assert context.session.current_credential() == rotated
    assert isinstance(context.session.state, Authorized)


@pytest.mark.asyncio
async def test_401_after_rotation_retries_without_refreshing(context, backend) -> None:
    backend.scripted_pairs.append(("t1", "r1"))
    await context.session.login("bob", "pw")
    backend.expire("t1")
    backend.calls.clear()
    rotated = Credential(access_token="t2", refresh_token="r2")

    async def rotate_on_rejection(response: httpx.Response) -> None:
        if response.status_code == 401 and response.request.url.path.endswith("/users/u1"):
            backend.grant("t2", "r2")
            context.credentials.update(rotated)

    context.api_client._client.event_hooks["response"].append(rotate_on_rejection)

    user = await context.users.get_user("u1")

    assert user.id == "u1"
    assert backend.paths() == ["/users/u1", "/users/u1"]
    assert backend.auth_headers("/users/u1") == ["Bearer t1", "Bearer t2"]
    assert context.session.current_credential() == rotated
