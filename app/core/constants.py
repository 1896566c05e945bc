class FieldSizes:
    # Common string lengths
    MEDIUM = 255
    LONG = 1000

    # Specific field sizes
    NAME = 100
    NAME_MIN = 2
    EMAIL = MEDIUM
    PASSWORD = 128
    PASSWORD_MIN = 6
    PASSWORD_HASH = LONG


class ErrorCode:
    """
    Machine readable codes carried in the ``error`` field of error bodies.
    """

    UNAUTHORIZED = "unauthorized"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    VALIDATION_ERROR = "validation_error"
    LOGIN_FAILED = "login_failed"
    REGISTRATION_FAILED = "registration_failed"
    CREATION_FAILED = "creation_failed"
    USER_NOT_FOUND = "user_not_found"
    UPDATE_FAILED = "update_failed"
    DELETE_FAILED = "delete_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL_ERROR = "internal_error"


# Largest value a BIGINT primary key or OFFSET can hold
MAX_DB_INTEGER = 2**63 - 1
