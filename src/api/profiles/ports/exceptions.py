"""Domain exceptions for the profiles bounded context."""


class ProfileNotFoundError(Exception):
    """Raised when the profile owner does not exist.

    Covers both an unknown username on the public page and a session
    whose user has since disappeared.
    """

    pass


class InvalidProfileSubmissionError(Exception):
    """Raised when a submitted profile document is malformed.

    Raised before any write takes place. The message is safe to show to
    the caller as-is.
    """

    pass


class StaleSessionError(Exception):
    """Raised when a session token no longer matches the stored owner.

    Tokens identify their user by id. If that id now belongs to someone
    else (for example after the in-memory store was reset), the username
    and email claims disagree with the stored user and the session is
    rejected before anything is read or written.
    """

    pass
