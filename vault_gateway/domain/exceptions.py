"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class TransportError(DomainException):
    """Record store unreachable, timed out, or answered with a non-success status"""

    pass


class MalformedResponseError(DomainException):
    """Record store answered, but the body is not the expected record collection"""

    pass


class IllegalStateError(DomainException):
    """Operation is not valid for the current session state"""

    pass


class AuthError(DomainException):
    """Base class for failed login attempts; message is safe to show to the user"""

    user_message = "Access Denied"


class MissingCredentialsError(AuthError):
    """Identity key or secret left blank"""

    user_message = "Security Alert: Credentials Required"


class InvalidCredentialsError(AuthError):
    """No record matches the submitted identity key and secret"""

    user_message = "Access Denied: Invalid Authorization"


class VaultUnavailableError(AuthError):
    """Record store could not be read during login"""

    user_message = "System Error: Vault Connection Timed Out"


class LoginInProgressError(AuthError):
    """Another login attempt is still awaiting the record store"""

    user_message = "Authorization already in progress"
