from concurrent.futures import ThreadPoolExecutor

import pytest
from chatbot.core.errors import DuplicateEmail, InvalidCredentials, InvalidInput


def test_register_assigns_increasing_ids(identity):
    first = identity.register("a@b.com", "pw1", "Alice")
    second = identity.register("c@d.com", "pw2", "Carol")
    assert (first, second) == (1, 2)


def test_register_normalizes_email(identity):
    user_id = identity.register("  Alice@Example.COM ", "pw1", "Alice")
    user = identity.get(user_id)
    assert user.email == "alice@example.com"
    assert user.display_name == "Alice"
    assert user.password_hash != "pw1"


@pytest.mark.parametrize("duplicate", ["a@b.com", "A@B.COM", "  a@b.com  ", "\tA@b.Com\n"])
def test_duplicate_email_regardless_of_case_and_whitespace(identity, duplicate):
    identity.register("a@b.com", "pw1", "Alice")
    with pytest.raises(DuplicateEmail):
        identity.register(duplicate, "other", "Mallory")
    assert len(identity) == 1


@pytest.mark.parametrize("email,password", [("", "pw"), ("   ", "pw"), ("a@b.com", ""), (None, "pw"), ("a@b.com", None)])
def test_register_rejects_empty_fields(identity, email, password):
    with pytest.raises(InvalidInput):
        identity.register(email, password, "x")


def test_missing_display_name_defaults_to_empty(identity):
    user_id = identity.register("a@b.com", "pw1")
    assert identity.get(user_id).display_name == ""


def test_verify_credentials(identity):
    user_id = identity.register("a@b.com", "pw1", "Alice")
    assert identity.verify_credentials(" A@B.com", "pw1") == user_id


@pytest.mark.parametrize("email,password", [("a@b.com", "wrong"), ("nobody@b.com", "pw1"), ("a@b.com", "")])
def test_verify_credentials_rejects_bad_login(identity, email, password):
    identity.register("a@b.com", "pw1", "Alice")
    with pytest.raises(InvalidCredentials):
        identity.verify_credentials(email, password)


def test_concurrent_registration_of_same_email_has_one_winner(identity):
    def attempt(i):
        try:
            return identity.register("Race@b.com" if i % 2 else "race@B.com ", "pw", f"user{i}")
        except DuplicateEmail:
            return None

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(16)))

    assert len([r for r in results if r is not None]) == 1
    assert len(identity) == 1


def test_concurrent_registration_never_duplicates_ids(identity):
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda i: identity.register(f"user{i}@b.com", "pw"), range(20)))
    assert sorted(ids) == list(range(1, 21))
