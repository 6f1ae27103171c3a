"""Field-level validation shared by the API schemas and the rule engines.

Every rule returns a list of errors with at most one entry for the field it
checks, so a request with several bad fields yields one message per field.
The same balance rule is applied wherever a balance value is accepted.
"""

from dataclasses import dataclass
from decimal import Decimal

from email_validator import EmailNotValidError, validate_email

from accounthub.domain.exceptions import InvalidArgumentError

NAME_REQUIRED = "Name is required"
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Email should be valid"
ACCOUNT_NUMBER_REQUIRED = "Account number is required"
BALANCE_REQUIRED = "Balance is required"
BALANCE_NON_NEGATIVE = "Balance must be positive or zero"
BALANCE_INVALID = "Balance must be a finite amount"
BALANCE_TOO_PRECISE = "Balance must have at most two decimal places"
BALANCE_TOO_LARGE = "Balance must not exceed {}"
PRIMARY_USER_ID_REQUIRED = "Primary user ID is required"
USER_ID_REQUIRED = "User ID is required"

MAX_BALANCE_DECIMAL_PLACES = 2
# Largest amount whose cents fit a signed 64-bit integer column.
MAX_BALANCE = Decimal(2**63 - 1).scaleb(-MAX_BALANCE_DECIMAL_PLACES)


@dataclass(frozen=True)
class FieldValidationError:
    """A single field validation error.

    Attributes:
        field: Name of the offending field.
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class FieldValidator:
    """Validators for the user and account fields accepted by the service."""

    @staticmethod
    def validate_required_text(
        value: str | None, field: str, message: str
    ) -> list[FieldValidationError]:
        """Reject None, empty and whitespace-only text."""
        if value is None or not value.strip():
            return [FieldValidationError(field=field, message=message, code=f"{field}_required")]
        return []

    @classmethod
    def validate_name(cls, name: str | None) -> list[FieldValidationError]:
        return cls.validate_required_text(name, "name", NAME_REQUIRED)

    @classmethod
    def validate_account_number(cls, account_number: str | None) -> list[FieldValidationError]:
        return cls.validate_required_text(
            account_number, "account_number", ACCOUNT_NUMBER_REQUIRED
        )

    @classmethod
    def validate_email(cls, email: str | None) -> list[FieldValidationError]:
        """Require a syntactically valid address once surrounding blanks are trimmed."""
        errors = cls.validate_required_text(email, "email", EMAIL_REQUIRED)
        if errors:
            return errors
        try:
            validate_email(email.strip(), check_deliverability=False)
        except EmailNotValidError:
            return [FieldValidationError(field="email", message=EMAIL_INVALID, code="email_invalid")]
        return []

    @staticmethod
    def validate_balance(
        balance: Decimal | None, required: bool = True
    ) -> list[FieldValidationError]:
        """Validate a monetary balance.

        Args:
            balance: The amount to check.
            required: Whether a missing balance is an error.

        Returns:
            List of validation errors (empty if valid).
        """
        if balance is None:
            if required:
                return [
                    FieldValidationError(
                        field="balance", message=BALANCE_REQUIRED, code="balance_required"
                    )
                ]
            return []

        amount = Decimal(balance)
        if not amount.is_finite():
            return [FieldValidationError(field="balance", message=BALANCE_INVALID, code="balance_invalid")]
        if amount < 0:
            return [
                FieldValidationError(
                    field="balance", message=BALANCE_NON_NEGATIVE, code="balance_negative"
                )
            ]
        if amount > MAX_BALANCE:
            return [
                FieldValidationError(
                    field="balance",
                    message=BALANCE_TOO_LARGE.format(MAX_BALANCE),
                    code="balance_too_large",
                )
            ]
        if amount.normalize().as_tuple().exponent < -MAX_BALANCE_DECIMAL_PLACES:
            return [
                FieldValidationError(
                    field="balance", message=BALANCE_TOO_PRECISE, code="balance_too_precise"
                )
            ]
        return []

    @staticmethod
    def validate_required_id(
        value: int | None, field: str, message: str
    ) -> list[FieldValidationError]:
        if value is None:
            return [FieldValidationError(field=field, message=message, code=f"{field}_required")]
        return []


def raise_for_errors(*error_lists: list[FieldValidationError]) -> None:
    """Raise InvalidArgumentError when any validator reported a problem.

    Args:
        *error_lists: Results of FieldValidator calls.

    Raises:
        InvalidArgumentError: With one message per offending field.
    """
    errors: dict[str, str] = {}
    for error_list in error_lists:
        for error in error_list:
            errors.setdefault(error.field, error.message)
    if errors:
        raise InvalidArgumentError.from_field_errors(errors)


def first_error_message(errors: list[FieldValidationError]) -> str | None:
    """Return the first message of a validator result, for schema validators."""
    return errors[0].message if errors else None
