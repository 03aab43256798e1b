# mypy: ignore-errors
"""Tests for role assignment and the current-actor endpoint."""

from fastapi import status

from ideabox.models import Role


def test_me(client, auth_token, member) -> None:
    response = client.get("/api/v1/auth/me", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["id"] == member.id
    assert body["role"] == "user"
    assert body["origin"] == "web"


def test_super_admin_assigns_role_by_email(client, super_admin_token, member, actor_repo) -> None:
    response = client.patch(
        "/api/v1/users/role",
        json={"username": member.email, "role": "moderator"},
        headers=super_admin_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["role"] == "moderator"
    assert actor_repo.get_actor(member.id).role == Role.MODERATOR


def test_super_admin_assigns_role_by_username(client, super_admin_token, make_actor) -> None:
    target = make_actor(username="discord-fan")

    response = client.patch(
        "/api/v1/users/role",
        json={"username": "discord-fan", "role": "admin"},
        headers=super_admin_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == target.id


def test_moderator_cannot_assign_roles(client, moderator_token, member) -> None:
    response = client.patch(
        "/api/v1/users/role",
        json={"username": member.email, "role": "admin"},
        headers=moderator_token,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_non_admin_cannot_probe_for_users(client, auth_token) -> None:
    response = client.patch(
        "/api/v1/users/role",
        json={"username": "nobody@example.com", "role": "admin"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_super_admin_cannot_change_own_role(client, super_admin_token, super_admin) -> None:
    response = client.patch(
        "/api/v1/users/role",
        json={"username": super_admin.email, "role": "user"},
        headers=super_admin_token,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_unknown_target(client, super_admin_token) -> None:
    response = client.patch(
        "/api/v1/users/role",
        json={"username": "ghost@example.com", "role": "moderator"},
        headers=super_admin_token,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_unknown_role(client, super_admin_token, member) -> None:
    response = client.patch(
        "/api/v1/users/role",
        json={"username": member.email, "role": "overlord"},
        headers=super_admin_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
