"""
Tests for User Management Endpoints

All routes are under /v1/auth and need a bearer token:
- GET    /user/{id}
- GET    /user/email/{email}
- GET    /users
- PUT    /user/{id}
- DELETE /user/{id}
- PUT    /user/{id}/password
"""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bookstore.models import User
from bookstore.services import PasswordHasher

from tests.conftest import TEST_PASSWORD


class TestGetUser:

    def test_get_user_by_id(self, client: TestClient, auth_headers: dict, sample_user: User):
        response = client.get(f"/v1/auth/user/{sample_user.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["email"] == "testuser@example.com"
        assert data["username"] == "testuser"
        assert data["first_name"] == "Test"
        assert data["role"] == "user"
        assert data["is_active"] is True
        # Password should NEVER be in response
        assert "password" not in data
        assert "hashed_password" not in data

    def test_get_user_not_found(self, client: TestClient, auth_headers: dict):
        response = client.get("/v1/auth/user/99999", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "user not found"}

    def test_get_user_by_email(self, client: TestClient, auth_headers: dict, second_user: User):
        response = client.get(f"/v1/auth/user/email/{second_user.email}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == second_user.id

    def test_get_user_by_email_not_found(self, client: TestClient, auth_headers: dict):
        response = client.get("/v1/auth/user/email/nobody@example.com", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_user_by_email_mixed_case_domain(self, client: TestClient, auth_headers: dict):
        """The lookup uses the same normalized form that registration stored."""
        registration = {
            "email": "Mixed@Example.COM",
            "password": "password123",
            "username": "mixed",
            "first_name": "Mixed",
            "last_name": "Case",
        }
        assert client.post("/v1/register", json=registration).status_code == 201
        login = client.post(
            "/v1/login",
            json={"email": "Mixed@Example.COM", "password": "password123"},
        )
        assert login.status_code == status.HTTP_200_OK

        response = client.get("/v1/auth/user/email/Mixed@Example.COM", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "mixed"
        assert response.json()["email"].lower() == "mixed@example.com"

    def test_get_user_by_malformed_email(self, client: TestClient, auth_headers: dict):
        response = client.get("/v1/auth/user/email/not-an-email", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "invalid email address"}

    def test_list_users_with_non_routable_stored_email(
        self,
        client: TestClient,
        auth_headers: dict,
        db_session: Session,
        hasher: PasswordHasher,
    ):
        """Rows written outside registration are returned as stored."""
        db_session.add(
            User(
                email="admin@localhost",
                hashed_password=hasher.hash("AdminPass123"),
                username="admin",
                first_name="Admin",
                last_name="Local",
            )
        )
        db_session.commit()

        response = client.get("/v1/auth/users", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert "admin@localhost" in [u["email"] for u in response.json()]

    def test_list_users(
        self,
        client: TestClient,
        auth_headers: dict,
        sample_user: User,
        second_user: User,
    ):
        response = client.get("/v1/auth/users", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        emails = [u["email"] for u in response.json()]
        assert emails == [sample_user.email, second_user.email]
        assert all("password" not in u for u in response.json())


class TestUpdateUser:

    def test_update_names(self, client: TestClient, auth_headers: dict, second_user: User):
        response = client.put(
            f"/v1/auth/user/{second_user.id}",
            json={"first_name": "Changed", "last_name": "Name"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "user updated"}

        fetched = client.get(f"/v1/auth/user/{second_user.id}", headers=auth_headers).json()
        assert fetched["first_name"] == "Changed"
        assert fetched["last_name"] == "Name"
        assert fetched["email"] == second_user.email

    def test_update_ignores_other_fields(
        self,
        client: TestClient,
        auth_headers: dict,
        sample_user: User,
    ):
        client.put(
            f"/v1/auth/user/{sample_user.id}",
            json={"first_name": "A", "last_name": "B", "email": "hijack@example.com", "role": "admin"},
            headers=auth_headers,
        )

        fetched = client.get(f"/v1/auth/user/{sample_user.id}", headers=auth_headers).json()
        assert fetched["email"] == sample_user.email
        assert fetched["role"] == "user"

    def test_update_missing_user(self, client: TestClient, auth_headers: dict):
        response = client.put(
            "/v1/auth/user/99999",
            json={"first_name": "A", "last_name": "B"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_name_too_long(self, client: TestClient, auth_headers: dict, sample_user: User):
        response = client.put(
            f"/v1/auth/user/{sample_user.id}",
            json={"first_name": "x" * 21, "last_name": "B"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestUpdatePassword:

    def test_update_password(self, client: TestClient, auth_headers: dict, sample_user: User):
        response = client.put(
            f"/v1/auth/user/{sample_user.id}/password",
            json={"new_password": "AnotherPass789"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "password updated"}

        login = client.post(
            "/v1/login",
            json={"email": sample_user.email, "password": "AnotherPass789"},
        )
        assert login.status_code == status.HTTP_200_OK

    def test_update_password_too_short(self, client: TestClient, auth_headers: dict, sample_user: User):
        response = client.put(
            f"/v1/auth/user/{sample_user.id}/password",
            json={"new_password": "short"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

        login = client.post(
            "/v1/login",
            json={"email": sample_user.email, "password": TEST_PASSWORD},
        )
        assert login.status_code == status.HTTP_200_OK

    def test_update_password_with_nul_byte(
        self,
        client: TestClient,
        auth_headers: dict,
        sample_user: User,
    ):
        response = client.put(
            f"/v1/auth/user/{sample_user.id}/password",
            json={"new_password": "Another\u0000Pass789"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "new_password" in response.json()["error"]

        login = client.post(
            "/v1/login",
            json={"email": sample_user.email, "password": TEST_PASSWORD},
        )
        assert login.status_code == status.HTTP_200_OK

    def test_update_password_missing_user(self, client: TestClient, auth_headers: dict):
        response = client.put(
            "/v1/auth/user/99999/password",
            json={"new_password": "AnotherPass789"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteUser:

    def test_delete_user(self, client: TestClient, auth_headers: dict, second_user: User):
        response = client.delete(f"/v1/auth/user/{second_user.id}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "user deleted"}

        get_response = client.get(f"/v1/auth/user/{second_user.id}", headers=auth_headers)
        assert get_response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_missing_user(self, client: TestClient, auth_headers: dict):
        response = client.delete("/v1/auth/user/99999", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "user not found"}
