import errno

from sqlalchemy.exc import IntegrityError, OperationalError

from message_board.utils.retry_utils import is_retryable_db_error


def test_locked_database_is_retryable():
    error = OperationalError("INSERT ...", {}, Exception("database is locked"))
    assert is_retryable_db_error(error)


def test_constraint_violation_is_not_retryable():
    error = IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed"))
    assert not is_retryable_db_error(error)


def test_network_errors():
    assert is_retryable_db_error(OSError(errno.ECONNREFUSED, "refused"))
    assert not is_retryable_db_error(OSError(errno.ENOENT, "missing"))


def test_unrelated_errors_are_not_retryable():
    assert not is_retryable_db_error(ValueError("bad input"))
