"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
signup, login and repository operations. They should be caught and
handled by the presentation layer.
"""


class InvalidSignupError(Exception):
    """Raised when signup data fails validation.

    The message is safe to show to the caller as-is.
    """

    pass


class DuplicateUsernameError(Exception):
    """Raised when attempting to register a username that already exists.

    Usernames are compared case-insensitively.
    """

    pass


class DuplicateEmailError(Exception):
    """Raised when attempting to register an email that already exists.

    Emails are compared case-insensitively.
    """

    pass


class InvalidCredentialsError(Exception):
    """Raised when a login does not match any user and password.

    Unknown identifiers and wrong passwords are deliberately not
    distinguished.
    """

    pass


class InvalidLoginError(Exception):
    """Raised when a login request is missing the identifier or password."""

    pass
