import hashlib
import hmac

import pytest

from reseller_sdk.engine.exceptions import SignatureVerificationError
from reseller_sdk.servers import security


# HMAC-SHA512("x1", key="s")
DIGEST_B_TRUE_A_X = (
    "5ca0cbb1ec6abbfc42eebf177e9276f9d36729623c2d5a832b4364fb04e3d6f3"
    "ec7e4bed7bdd076f3989a7b755e7ad41f9514609876df1506319eb972fd27f07"
)

# HMAC-SHA512("12.5ord-71completed", key="cb-secret")
DIGEST_ORDER_CALLBACK = (
    "acd173ad2f6378d045a1d7564f7e403090a6ce06340b3104da97ab1e36a5f325"
    "bb424c3f5a935afa383753feb1b6580b9908f9a848374feaabc542cbfb9a6974"
)

# HMAC-SHA512("ord-13", key="cb-secret")
DIGEST_INTEGRAL_FLOAT = (
    "74fd658f79297438e8bceba4eb4bf0e9cdc934ee7e01e51c98f770a8f25c7e5e"
    "69f9b5e56f00b17ebacc8324e66392b2783d61670db64891d691cf8a12135f62"
)

ORDER_CALLBACK = {
    "status": "Completed",
    "order_number": "ORD-7",
    "amount": 12.5,
    "sandbox": False,
    "paid": True,
    "meta": {"a": 1},
    "items": [1, 2],
    "note": None,
}


def test_canonical_string():
    assert security.canonical_callback_string({"b": True, "a": "X"}) == "x1"
    assert security.canonical_callback_string(ORDER_CALLBACK) == "12.5ord-71completed"
    assert security.canonical_callback_string({}) == ""


def test_sign_regression_vectors():
    assert security.sign_callback_data("s", {"b": True, "a": "X"}) == DIGEST_B_TRUE_A_X
    assert security.sign_callback_data("cb-secret", ORDER_CALLBACK) == DIGEST_ORDER_CALLBACK
    assert security.sign_callback_data("cb-secret", {"quantity": 3.0, "order_number": "ORD-1"}) == DIGEST_INTEGRAL_FLOAT


def test_sign_is_deterministic_hex_sha512():
    signature = security.sign_callback_data("s", ORDER_CALLBACK)
    assert signature == security.sign_callback_data("s", dict(ORDER_CALLBACK))
    assert len(signature) == 128
    assert all(c in "0123456789abcdef" for c in signature)


def test_key_order_does_not_matter():
    reversed_payload = dict(reversed(list(ORDER_CALLBACK.items())))
    assert security.sign_callback_data("k", reversed_payload) == security.sign_callback_data("k", ORDER_CALLBACK)


def test_boolean_handling():
    assert security.canonical_callback_string({"a": True}) == "1"
    assert security.canonical_callback_string({"a": False}) == ""
    expected = hmac.new(b"s", b"", hashlib.sha512).hexdigest()
    assert security.sign_callback_data("s", {"a": False, "b": None}) == expected


def test_numbers_render_as_plain_strings():
    assert security.canonical_callback_string({"a": 10, "b": 2.0, "c": 0.25}) == "1020.25"


def test_secret_changes_signature():
    assert security.sign_callback_data("a", ORDER_CALLBACK) != security.sign_callback_data("b", ORDER_CALLBACK)


def test_verify_signature_exact_match_only():
    assert security.verify_signature(DIGEST_B_TRUE_A_X, DIGEST_B_TRUE_A_X)
    assert not security.verify_signature(DIGEST_B_TRUE_A_X.upper(), DIGEST_B_TRUE_A_X)
    assert not security.verify_signature(DIGEST_B_TRUE_A_X[:-1], DIGEST_B_TRUE_A_X)
    assert not security.verify_signature(DIGEST_B_TRUE_A_X + "0", DIGEST_B_TRUE_A_X)
    assert not security.verify_signature(None, DIGEST_B_TRUE_A_X)
    assert not security.verify_signature("", DIGEST_B_TRUE_A_X)


def test_verify_signature_uses_constant_time_compare(monkeypatch):
    calls = []
    real_compare = security.hmac.compare_digest

    def spy(a, b):
        calls.append((a, b))
        return real_compare(a, b)

    monkeypatch.setattr(security.hmac, "compare_digest", spy)
    assert security.verify_signature("abc", "abc")
    assert calls == [(b"abc", b"abc")]


def test_verify_callback():
    assert security.verify_callback("s", {"a": "X", "b": True}, DIGEST_B_TRUE_A_X)
    assert not security.verify_callback("s", {"a": "Y", "b": True}, DIGEST_B_TRUE_A_X)
    assert not security.verify_callback("s", {"a": "X", "b": True}, "ü" * 128)


def test_require_valid_signature():
    security.require_valid_signature("s", {"a": "X", "b": True}, DIGEST_B_TRUE_A_X)
    with pytest.raises(SignatureVerificationError):
        security.require_valid_signature("wrong", {"a": "X", "b": True}, DIGEST_B_TRUE_A_X)


# HMAC-SHA512("Аккаунт Üdone", key="cb-secret"), only ASCII letters folded
DIGEST_NON_ASCII = (
    "f32d34fd366631d52bd45da30be11602e453c1cf03d67d95fc6d00f6280d1894"
    "5f0f90c7ac45d09a52a08275de934d069573bc99b492b29895fe7a46b30d396d"
)


def test_lowercasing_folds_ascii_letters_only():
    payload = {"product": "Аккаунт Ü", "status": "Done"}
    assert security.canonical_callback_string(payload) == "Аккаунт Üdone"
    assert security.sign_callback_data("cb-secret", payload) == DIGEST_NON_ASCII
    assert security.verify_callback("cb-secret", payload, DIGEST_NON_ASCII)
