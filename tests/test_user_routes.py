import re
from http import HTTPStatus

import pytest

USER_KEYS = {
    "id",
    "firstName",
    "lastName",
    "fullName",
    "email",
    "phoneNumber",
    "accountNumber",
    "balance",
    "createdAt",
    "updatedAt",
    "isActive",
}


@pytest.fixture()
def john(register):
    return register()


@pytest.fixture()
def headers(john, auth_headers):
    return auth_headers(john["token"])


def _create(client, headers, **overrides):
    payload = {
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane@example.com",
        "password": "password123",
        "phoneNumber": "+1987654321",
        "initialBalance": 2500.5,
    }
    payload.update(overrides)
    return client.post("/v1/users", json=payload, headers=headers)


def test_users_endpoints_require_authentication(client, john):
    user_id = john["user"]["id"]

    assert client.get("/v1/users").status_code == HTTPStatus.UNAUTHORIZED
    assert client.get(f"/v1/users/{user_id}").status_code == HTTPStatus.UNAUTHORIZED
    assert _create(client, {}).status_code == HTTPStatus.UNAUTHORIZED
    assert client.delete(f"/v1/users/{user_id}").status_code == HTTPStatus.UNAUTHORIZED


def test_create_then_get_round_trip(client, headers, auth_headers):
    created = _create(client, headers)
    assert created.status_code == HTTPStatus.CREATED
    body = created.get_json()

    assert set(body) == USER_KEYS
    assert re.fullmatch(r"ACC\d{6}", body["accountNumber"])
    assert body["balance"] == 2500.5
    assert body["isActive"] is True
    assert body["updatedAt"] is None

    # self-access: log in as the new user to read the record back
    login = client.post(
        "/v1/auth/login", json={"email": "jane@example.com", "password": "password123"}
    )
    jane_headers = auth_headers(login.get_json()["token"])
    fetched = client.get(f"/v1/users/{body['id']}", headers=jane_headers).get_json()

    for key in ("firstName", "lastName", "email", "phoneNumber", "balance", "accountNumber"):
        assert fetched[key] == body[key]


def test_create_duplicate_email_is_case_insensitive(client, headers):
    assert _create(client, headers, email="A@x.com").status_code == HTTPStatus.CREATED

    second = _create(client, headers, email="a@x.com")
    assert second.status_code == HTTPStatus.CONFLICT
    assert second.get_json() == {"error": "User with email a@x.com already exists."}


def test_create_negative_balance_is_bad_request(client, headers):
    response = _create(client, headers, initialBalance=-5)

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert "Initial balance cannot be negative." in response.get_json()["errors"]


def test_create_with_wrong_types_is_bad_request(client, headers):
    response = _create(client, headers, initialBalance="lots")
    assert response.status_code == HTTPStatus.BAD_REQUEST


def test_create_with_non_object_body_is_unprocessable(client, headers):
    response = client.post("/v1/users", data="[]", content_type="application/json", headers=headers)
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_create_without_password_uses_default(client, headers):
    payload = {"firstName": "No", "lastName": "Password", "email": "nopass@example.com"}
    assert client.post("/v1/users", json=payload, headers=headers).status_code == 201

    login = client.post(
        "/v1/auth/login", json={"email": "nopass@example.com", "password": "defaultpassword123"}
    )
    assert login.status_code == HTTPStatus.OK


def test_create_with_blank_phone_stores_no_phone(client, headers):
    response = _create(client, headers, phoneNumber="   ")

    assert response.status_code == HTTPStatus.CREATED
    assert response.get_json()["phoneNumber"] is None


def test_account_numbers_are_unique(client, headers, john):
    numbers = {john["user"]["accountNumber"]}
    for i in range(5):
        body = _create(client, headers, email=f"user{i}@example.com").get_json()
        numbers.add(body["accountNumber"])

    assert len(numbers) == 6


def test_list_returns_active_users(client, headers, john):
    jane = _create(client, headers).get_json()

    listed = client.get("/v1/users", headers=headers).get_json()
    assert [u["id"] for u in listed] == [john["user"]["id"], jane["id"]]

    client.delete(f"/v1/users/{jane['id']}", headers=headers)
    listed = client.get("/v1/users", headers=headers).get_json()
    assert [u["id"] for u in listed] == [john["user"]["id"]]


def test_self_access_rule(client, headers, john):
    jane = _create(client, headers).get_json()

    assert client.get(f"/v1/users/{jane['id']}", headers=headers).status_code == HTTPStatus.FORBIDDEN
    own = client.get(f"/v1/users/{john['user']['id']}", headers=headers)
    assert own.status_code == HTTPStatus.OK
    assert own.get_json()["id"] == john["user"]["id"]


def test_get_by_email(client, headers):
    _create(client, headers)

    found = client.get("/v1/users/by-email", query_string={"email": "JANE@example.com"}, headers=headers)
    assert found.status_code == HTTPStatus.OK
    assert found.get_json()["firstName"] == "Jane"

    missing = client.get("/v1/users/by-email", query_string={"email": "x@example.com"}, headers=headers)
    assert missing.status_code == HTTPStatus.NOT_FOUND

    blank = client.get("/v1/users/by-email", headers=headers)
    assert blank.status_code == HTTPStatus.BAD_REQUEST
    assert blank.get_json() == {"error": "Email parameter is required."}


def test_partial_update_changes_only_given_field(client, headers, john):
    user_id = john["user"]["id"]

    response = client.patch(f"/v1/users/{user_id}", json={"lastName": "X"}, headers=headers)

    assert response.status_code == HTTPStatus.OK
    body = response.get_json()
    assert body["lastName"] == "X"
    assert body["updatedAt"] is not None
    for key in ("firstName", "email", "balance", "phoneNumber", "accountNumber"):
        assert body[key] == john["user"][key]


def test_update_missing_user_is_not_found(client, headers):
    response = client.patch("/v1/users/9999", json={"lastName": "X"}, headers=headers)
    assert response.status_code == HTTPStatus.NOT_FOUND


def test_update_email_collision_is_conflict(client, headers, john):
    _create(client, headers)

    response = client.patch(
        f"/v1/users/{john['user']['id']}", json={"email": "JANE@example.com"}, headers=headers
    )
    assert response.status_code == HTTPStatus.CONFLICT


def test_update_to_own_email_is_allowed(client, headers, john):
    response = client.patch(
        f"/v1/users/{john['user']['id']}", json={"email": "John@Example.com"}, headers=headers
    )
    assert response.status_code == HTTPStatus.OK
    assert response.get_json()["email"] == "John@Example.com"


def test_update_email_of_deleted_user_is_conflict(client, headers, john):
    jane = _create(client, headers).get_json()
    client.delete(f"/v1/users/{jane['id']}", headers=headers)

    response = client.patch(
        f"/v1/users/{john['user']['id']}", json={"email": "jane@example.com"}, headers=headers
    )
    assert response.status_code == HTTPStatus.CONFLICT


def test_update_rejects_padded_email(client, headers, john):
    response = client.patch(
        f"/v1/users/{john['user']['id']}", json={"email": " pad@example.com "}, headers=headers
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["errors"] == ["Email format is invalid."]

    me = client.get("/v1/auth/me", headers=headers).get_json()
    assert me["email"] == "john@example.com"


def test_update_invalid_fields_are_bad_request(client, headers, john):
    response = client.patch(
        f"/v1/users/{john['user']['id']}",
        json={"firstName": " ", "phoneNumber": "12"},
        headers=headers,
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["errors"] == [
        "Phone number format is invalid.",
        "FirstName cannot be empty if provided.",
    ]


def test_delete_is_soft_and_reports_not_found_afterwards(client, headers):
    jane = _create(client, headers).get_json()
    path = f"/v1/users/{jane['id']}"

    assert client.head(path, headers=headers).status_code == HTTPStatus.OK
    assert client.delete(path, headers=headers).status_code == HTTPStatus.NO_CONTENT
    assert client.delete(path, headers=headers).status_code == HTTPStatus.NOT_FOUND
    assert client.head(path, headers=headers).status_code == HTTPStatus.NOT_FOUND

    # the row survives, so its email still cannot be reused
    assert _create(client, headers).status_code == HTTPStatus.CONFLICT


def test_deleted_user_cannot_log_in(client, headers, john):
    client.delete(f"/v1/users/{john['user']['id']}", headers=headers)

    login = client.post(
        "/v1/auth/login", json={"email": "john@example.com", "password": "password123"}
    )
    assert login.status_code == HTTPStatus.UNAUTHORIZED


def test_summary_exists_only_on_v2(client, headers, john):
    user_id = john["user"]["id"]

    v1 = client.get(f"/v1/users/{user_id}/summary", headers=headers)
    assert v1.status_code == HTTPStatus.NOT_FOUND

    v2 = client.get(f"/v2/users/{user_id}/summary", headers=headers)
    assert v2.status_code == HTTPStatus.OK
    body = v2.get_json()
    assert body["user"]["id"] == user_id
    assert body["metadata"]["apiVersion"] == "2.0"
    assert body["metadata"]["accountAgeDays"] == 0
    assert "Account Analytics" in body["metadata"]["features"]


def test_v2_serves_the_v1_routes_too(client, headers, john):
    response = client.get(f"/v2/users/{john['user']['id']}", headers=headers)
    assert response.status_code == HTTPStatus.OK


def test_summary_on_v1_is_not_found_even_without_a_token(client, john):
    user_id = john["user"]["id"]

    assert client.get(f"/v1/users/{user_id}/summary").status_code == HTTPStatus.NOT_FOUND
    assert client.get(f"/v2/users/{user_id}/summary").status_code == HTTPStatus.UNAUTHORIZED
