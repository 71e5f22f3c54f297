"""
Tests for UserRepository: authentication, registration, updates and
job applications.
"""

import pytest

from jobly.core.errors import BadRequestError, DuplicateError, NotFoundError, UnauthorizedError
from jobly.core.security import verify_password
from jobly.crud import UserRepository


U1 = {"username": "u1", "firstName": "U1F", "lastName": "U1L", "email": "u1@email.com", "isAdmin": False}
U2 = {"username": "u2", "firstName": "U2F", "lastName": "U2L", "email": "u2@email.com", "isAdmin": False}


@pytest.fixture
def users(store, seeded):
    return UserRepository(store)


class TestAuthenticate:

    def test_valid_credentials(self, users):
        assert users.authenticate("u1", "password1") == U1

    def test_unknown_user(self, users):
        with pytest.raises(UnauthorizedError) as exc_info:
            users.authenticate("nope", "password")
        assert str(exc_info.value) == "Invalid username/password"

    def test_wrong_password(self, users):
        """Same error as an unknown user"""
        with pytest.raises(UnauthorizedError) as exc_info:
            users.authenticate("u1", "wrong")
        assert str(exc_info.value) == "Invalid username/password"


class TestRegister:

    new_user = {
        "username": "new",
        "firstName": "Test",
        "lastName": "Tester",
        "email": "test@test.com",
        "isAdmin": False,
    }

    def test_register(self, users, store):
        user = users.register({**self.new_user, "password": "password"})

        assert user == self.new_user
        row = store.execute("SELECT password FROM users WHERE username = $1", ["new"])[0]
        assert row["password"].startswith("$2b$")
        assert verify_password("password", row["password"])

    def test_register_admin(self, users):
        user = users.register({**self.new_user, "password": "password", "isAdmin": True})
        assert user["isAdmin"]

    def test_is_admin_defaults_to_false(self, users):
        data = {k: v for k, v in self.new_user.items() if k != "isAdmin"}
        assert not users.register({**data, "password": "password"})["isAdmin"]

    def test_duplicate(self, users):
        with pytest.raises(DuplicateError):
            users.register({**self.new_user, "username": "u1", "password": "password"})


class TestFind:

    def test_find_all_includes_applied_jobs(self, users, seeded):
        result = users.find_all()

        assert [user["username"] for user in result] == ["admin", "u1", "u2"]
        assert result[1] == {**U1, "jobs": [seeded["T1"], seeded["T2"]]}
        assert result[2] == {**U2, "jobs": []}

    def test_get(self, users, seeded):
        assert users.get("u1") == {**U1, "jobs": [seeded["T1"], seeded["T2"]]}
        assert users.get("u2")["jobs"] == []

    def test_get_not_found(self, users):
        with pytest.raises(NotFoundError):
            users.get("nope")


class TestUpdate:

    def test_update(self, users):
        user = users.update("u1", {"firstName": "NewF", "email": "new@email.com"})
        assert user == {**U1, "firstName": "NewF", "email": "new@email.com"}

    def test_update_password_is_hashed(self, users):
        data = {"password": "new password"}
        user = users.update("u1", data)

        assert "password" not in user
        assert data == {"password": "new password"}
        assert users.authenticate("u1", "new password")["username"] == "u1"

    def test_not_found(self, users):
        with pytest.raises(NotFoundError):
            users.update("nope", {"firstName": "test"})

    def test_no_data(self, users):
        with pytest.raises(BadRequestError):
            users.update("u1", {})


class TestRemove:

    def test_remove(self, users, store):
        users.remove("u1")

        with pytest.raises(NotFoundError):
            users.get("u1")
        assert store.execute("SELECT job_id FROM applications WHERE username = $1", ["u1"]) == []

    def test_not_found(self, users):
        with pytest.raises(NotFoundError):
            users.remove("nope")


class TestApplyToJob:

    def test_apply(self, users, seeded):
        assert users.apply_to_job("u2", seeded["T1"]) == {"applied": seeded["T1"]}
        assert users.get("u2")["jobs"] == [seeded["T1"]]

    def test_unknown_user(self, users, seeded):
        with pytest.raises(NotFoundError) as exc_info:
            users.apply_to_job("nope", seeded["T1"])
        assert "nope" in str(exc_info.value)

    def test_unknown_job(self, users):
        with pytest.raises(NotFoundError) as exc_info:
            users.apply_to_job("u1", 0)
        assert "Job" in str(exc_info.value)

    def test_duplicate_application(self, users, seeded):
        with pytest.raises(DuplicateError):
            users.apply_to_job("u1", seeded["T1"])
