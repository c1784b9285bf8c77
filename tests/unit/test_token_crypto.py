import uuid

from core.utils import token_crypto

SECRET = "unit-test-secret-key-with-enough-length"


def test_hash_and_verify_password():
    encoded = token_crypto.hash_password("s3cret-pass")
    assert encoded.startswith("$argon2id$")
    assert token_crypto.verify_password("s3cret-pass", encoded) is True
    assert token_crypto.verify_password("wrong-pass", encoded) is False


def test_verify_password_rejects_garbage_hash():
    assert token_crypto.verify_password("x", "not-a-hash") is False
    assert token_crypto.verify_password("", "") is False


def test_access_token_carries_user_and_role():
    uid = uuid.uuid4()
    token = token_crypto.issue_access_token(uid, "citizen", secret=SECRET, expires_minutes=5)
    claims = token_crypto.decode_access_token(token, secret=SECRET)
    assert claims is not None
    assert claims.user_id == uid
    assert claims.role == "citizen"


def test_expired_token_rejected():
    token = token_crypto.issue_access_token(uuid.uuid4(), "citizen", secret=SECRET, expires_minutes=-1)
    assert token_crypto.decode_access_token(token, secret=SECRET) is None


def test_wrong_secret_rejected():
    token = token_crypto.issue_access_token(uuid.uuid4(), "admin", secret=SECRET, expires_minutes=5)
    assert token_crypto.decode_access_token(token, secret=SECRET + "-other") is None


def test_malformed_token_rejected():
    assert token_crypto.decode_access_token("abc.def.ghi", secret=SECRET) is None
    assert token_crypto.decode_access_token("", secret=SECRET) is None


def test_parse_bearer():
    assert token_crypto.parse_bearer("Bearer abc") == "abc"
    assert token_crypto.parse_bearer("bearer   abc ") == "abc"
    assert token_crypto.parse_bearer("Basic abc") is None
    assert token_crypto.parse_bearer("Bearer ") is None
    assert token_crypto.parse_bearer(None) is None
