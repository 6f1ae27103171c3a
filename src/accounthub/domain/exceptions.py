"""Domain errors raised by the AccountHub rule engines.

Each error kind maps to one stable condition. The API layer translates them
to HTTP responses; nothing in the domain retries or swallows them.
"""

USER_NOT_FOUND = "User not found with ID: {}"
USER_ALREADY_EXISTS = "User already exists with email: {}"
USER_HAS_ACCOUNTS = "Cannot delete user with ID {} because they have associated accounts"
ACCOUNT_NOT_FOUND = "Account not found with ID: {}"
ACCOUNT_ALREADY_EXISTS = "Account already exists with account number: {}"
ACCOUNT_BALANCE_NOT_ZERO = "Cannot delete account with ID {} because balance is not zero"
USER_ALREADY_ASSOCIATED = "User with ID {} is already associated with account ID {}"
METRICS_PARAMETERS_REQUIRED = (
    "At least one of greater_than or less_than parameter must be provided"
)


class AccountHubError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(AccountHubError):
    """Raised when a referenced user, account or association does not exist."""

    def __init__(self, entity: str, identity: int, message: str) -> None:
        self.entity = entity
        self.identity = identity
        super().__init__(message)


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: int) -> None:
        super().__init__("user", user_id, USER_NOT_FOUND.format(user_id))


class AccountNotFoundError(NotFoundError):
    def __init__(self, account_id: int) -> None:
        super().__init__("account", account_id, ACCOUNT_NOT_FOUND.format(account_id))


class AlreadyExistsError(AccountHubError):
    """Raised on a uniqueness violation. Carries the conflicting value."""

    def __init__(self, field: str, value: str, message: str) -> None:
        self.field = field
        self.value = value
        super().__init__(message)


class UserAlreadyExistsError(AlreadyExistsError):
    def __init__(self, email: str) -> None:
        super().__init__("email", email, USER_ALREADY_EXISTS.format(email))


class AccountAlreadyExistsError(AlreadyExistsError):
    def __init__(self, account_number: str) -> None:
        super().__init__(
            "account_number",
            account_number,
            ACCOUNT_ALREADY_EXISTS.format(account_number),
        )


class UserAlreadyAssociatedError(AccountHubError):
    """Raised when any association already exists for an (account, user) pair."""

    def __init__(self, account_id: int, user_id: int) -> None:
        self.account_id = account_id
        self.user_id = user_id
        super().__init__(USER_ALREADY_ASSOCIATED.format(user_id, account_id))


class UserHasAccountsError(AccountHubError):
    """Raised when deleting a user that still has account associations."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(USER_HAS_ACCOUNTS.format(user_id))


class AccountBalanceNotZeroError(AccountHubError):
    """Raised when deleting an account whose balance is not exactly zero."""

    def __init__(self, account_id: int) -> None:
        self.account_id = account_id
        super().__init__(ACCOUNT_BALANCE_NOT_ZERO.format(account_id))


class InvalidArgumentError(AccountHubError):
    """Raised for insufficient parameters or field-level constraint failures.

    Attributes:
        errors: Mapping of field name to message, one entry per offending
            field. Empty when the failure is not tied to a single field.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        self.errors = errors or {}
        super().__init__(message)

    @classmethod
    def from_field_errors(cls, errors: dict[str, str]) -> "InvalidArgumentError":
        """Build an error from per-field messages."""
        return cls("Validation failed", errors)
