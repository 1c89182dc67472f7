"""
Exception Definitions Module

Defines the exception hierarchy of the SDK. Expected failures of an API
operation (missing fields, failed HTTP calls, missing token, bad callback
signature) are returned as values and never raised; the classes below cover
programming errors, broken configuration and protocol drift.

Exception Hierarchy:
    SDKError (root)
    ├── ConfigurationError
    ├── MalformedResponseError
    ├── UnknownRuleError
    ├── UnknownEndpointError
    └── SignatureVerificationError
"""


class SDKError(Exception):
    """
    Root exception class for all SDK-specific exceptions.

    Catch this to handle every error raised by the SDK in one place.
    """
    pass


class ConfigurationError(SDKError):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Explicit env file that does not exist
    - Settings file that is not a flat JSON object
    - Non-positive timeout value
    """
    pass


class MalformedResponseError(SDKError):
    """
    Raised when the API answers with a non-empty body that is not valid JSON.

    An empty body means "no data" and is not an error; a body that cannot
    be decoded means the remote protocol changed.

    Attributes:
        path: Endpoint path that produced the body
        body: The first bytes of the offending body
    """

    def __init__(self, message: str, path: str = "", body: str = ""):
        super().__init__(message)
        self.path = path
        self.body = body


class UnknownRuleError(SDKError):
    """
    Raised when a rule string names a tag with no registered rule.
    """
    pass


class UnknownEndpointError(SDKError):
    """
    Raised when an endpoint table is given an operation the API does not have.
    """
    pass


class SignatureVerificationError(SDKError):
    """
    Raised by callers that prefer an exception over a boolean result
    when a callback signature does not match.
    """
    pass
