from .exceptions import (
    SDKError,
    ConfigurationError,
    MalformedResponseError,
    UnknownRuleError,
    UnknownEndpointError,
    SignatureVerificationError,
)
from .session import SessionState, SettingsStore, JsonSettingsStore
from .validators import RULES, RuleOutcome, register_rule, is_empty, validate

__all__ = [
    "SDKError",
    "ConfigurationError",
    "MalformedResponseError",
    "UnknownRuleError",
    "UnknownEndpointError",
    "SignatureVerificationError",
    "SessionState",
    "SettingsStore",
    "JsonSettingsStore",
    "RULES",
    "RuleOutcome",
    "register_rule",
    "is_empty",
    "validate",
]
