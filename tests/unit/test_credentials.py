"""
Password hashing and session token helpers.
"""

import bcrypt
import pytest

from message_board.errors import InvalidInput
from message_board.utils.auth import (
    BCRYPT_ROUNDS,
    generate_session_token,
    get_password_hash,
    session_token_digest,
    sign_session_token,
    unsign_session_token,
    verify_password,
)


def test_hash_verifies_against_original_password():
    hashed = get_password_hash("pw1")
    assert verify_password("pw1", hashed)


def test_hash_rejects_other_password():
    hashed = get_password_hash("pw1")
    assert not verify_password("pw2", hashed)
    assert not verify_password("PW1", hashed)


def test_each_hash_uses_a_fresh_salt():
    first = get_password_hash("same password")
    second = get_password_hash("same password")
    assert first != second
    assert verify_password("same password", first)
    assert verify_password("same password", second)


def test_hash_uses_fixed_cost_factor():
    hashed = get_password_hash("pw")
    # $2b$10$...
    assert hashed.split("$")[2] == f"{BCRYPT_ROUNDS:02d}"


def test_verify_never_raises_on_malformed_hash():
    assert verify_password("pw", "not-a-bcrypt-hash") is False
    assert verify_password("pw", "") is False


def test_unicode_passwords_round_trip():
    hashed = get_password_hash("pässwörd-🔑")
    assert verify_password("pässwörd-🔑", hashed)
    assert not verify_password("passwort", hashed)


def test_password_longer_than_bcrypt_limit_is_rejected():
    with pytest.raises(InvalidInput):
        get_password_hash("x" * 73)


def test_hash_is_standard_bcrypt():
    hashed = get_password_hash("interop")
    assert bcrypt.checkpw(b"interop", hashed.encode("utf-8"))


def test_session_tokens_are_unique_and_opaque():
    tokens = {generate_session_token() for _ in range(50)}
    assert len(tokens) == 50
    assert all(len(token) >= 40 for token in tokens)


def test_token_digest_is_stable_and_hides_token():
    token = generate_session_token()
    assert session_token_digest(token) == session_token_digest(token)
    assert token not in session_token_digest(token)
    assert len(session_token_digest(token)) == 64


def test_signed_token_round_trips():
    token = generate_session_token()
    assert unsign_session_token(sign_session_token(token)) == token


def test_tampered_cookie_is_rejected():
    signed = sign_session_token(generate_session_token())
    header, payload, signature = signed.split(".")
    forged = ".".join([header, payload, signature[::-1]])
    assert unsign_session_token(forged) is None


def test_unsigned_or_missing_cookie_is_rejected():
    assert unsign_session_token(None) is None
    assert unsign_session_token("") is None
    assert unsign_session_token(generate_session_token()) is None
