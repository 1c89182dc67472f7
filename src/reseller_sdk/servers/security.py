import hashlib
import hmac
import string
from typing import Any, Mapping, Optional

from ..engine.exceptions import SignatureVerificationError


SIGNATURE_HEADER = "Signature"

# Only A-Z are folded, non-ASCII letters keep their case.
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _scalar_to_string(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return ""
    if isinstance(value, float):
        # Integral floats render without a fractional part (12.0 -> "12").
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    return str(value)


def canonical_callback_string(data: Mapping[str, Any]) -> str:
    """
    Build the string that callback signatures are computed over.

    Values are concatenated in ascending key order; lists, dicts and nulls
    are skipped, ``True`` becomes ``"1"`` and ``False`` nothing. ASCII
    letters of the result are lowercased.

    Args:
        data: Decoded callback payload.

    Returns:
        The lowercased canonical string.
    """
    parts = []
    for key in sorted(data, key=str):
        value = data[key]
        if value is None or isinstance(value, (list, tuple, dict, set)):
            continue
        parts.append(_scalar_to_string(value))
    return "".join(parts).translate(_ASCII_LOWER)


def sign_callback_data(secret: str, data: Mapping[str, Any]) -> str:
    """
    Compute the signature of a callback payload.

    Args:
        secret: The user secret shared with the API.
        data: Decoded callback payload.

    Returns:
        HMAC-SHA512 hex digest (128 characters).
    """
    message = canonical_callback_string(data)
    return hmac.new(
        key=secret.encode(),
        msg=message.encode(),
        digestmod=hashlib.sha512,
    ).hexdigest()


def verify_signature(expected: Optional[str], computed: Optional[str]) -> bool:
    """
    Constant-time, byte-exact comparison of two signatures.

    Signatures that differ only in case or length do not match; a missing
    signature never matches.
    """
    if not expected or not computed:
        return False
    return hmac.compare_digest(expected.encode(), computed.encode())


def verify_callback(secret: str, data: Mapping[str, Any], signature: Optional[str]) -> bool:
    """
    Check the ``Signature`` header delivered with a callback.

    Returns:
        True when the payload was signed with ``secret``.
    """
    return verify_signature(signature, sign_callback_data(secret, data))


def require_valid_signature(secret: str, data: Mapping[str, Any], signature: Optional[str]) -> None:
    """
    Verify a callback signature.

    Raises:
        SignatureVerificationError: If the signature is missing or wrong.
    """
    if not verify_callback(secret, data, signature):
        raise SignatureVerificationError("Signature verification failed")
