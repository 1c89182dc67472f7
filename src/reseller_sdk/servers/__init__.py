from .apps import CallbackServer
from .security import (
    SIGNATURE_HEADER,
    canonical_callback_string,
    sign_callback_data,
    verify_signature,
    verify_callback,
    require_valid_signature,
)

__all__ = [
    "CallbackServer",
    "SIGNATURE_HEADER",
    "canonical_callback_string",
    "sign_callback_data",
    "verify_signature",
    "verify_callback",
    "require_valid_signature",
]
