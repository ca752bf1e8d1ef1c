from event_registration.auth_service.utils import hash_password, verify_password


def test_hash_password_is_not_plaintext():
    hashed = hash_password("password123")
    assert hashed != "password123"
    assert hashed.startswith("$argon2")


def test_hash_password_is_salted():
    assert hash_password("password123") != hash_password("password123")


def test_verify_password_match():
    hashed = hash_password("password123")
    assert verify_password(hashed, "password123") is True


def test_verify_password_mismatch():
    hashed = hash_password("password123")
    assert verify_password(hashed, "password124") is False


def test_verify_password_malformed_hash():
    assert verify_password("not-a-hash", "password123") is False


def test_verify_password_empty_hash():
    assert verify_password("", "password123") is False
    assert verify_password(None, "password123") is False


def test_verify_password_non_string_password():
    hashed = hash_password("12345")
    assert verify_password(hashed, 12345) is False
