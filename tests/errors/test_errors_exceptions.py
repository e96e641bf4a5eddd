import errno
import unittest

from unistore.errors.exceptions import (
    AlreadyExistsError,
    AuthError,
    BackendError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
    QuotaExceededError,
    RateLimitError,
    UniStoreError,
    map_http_error,
    map_os_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = UniStoreError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_backend_specializations(self) -> None:
        for cls in (AuthError, PermissionDeniedError, ConflictError, RateLimitError):
            self.assertTrue(issubclass(cls, BackendError))
        self.assertTrue(issubclass(BackendError, UniStoreError))

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, NotFoundError)

        err = map_http_error(HttpErrorInfo(status_code=400, message="bad req"))
        self.assertIsInstance(err, InvalidArgumentError)

        err = map_http_error(HttpErrorInfo(status_code=429, message="rate"))
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(HttpErrorInfo(status_code=409, message="conflict"))
        self.assertIsInstance(err, ConflictError)

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, AuthError)

    def test_map_http_error_403_variants(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="quotaExceeded", message="quota")
        )
        self.assertIsInstance(err, QuotaExceededError)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="userRateLimitExceeded", message="x")
        )
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="insufficientPermissions", message="x")
        )
        self.assertIsInstance(err, PermissionDeniedError)

    def test_map_http_error_5xx_is_backend_error(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=503, message="unavail"))
        self.assertIs(type(err), BackendError)
        self.assertEqual(err.details["status_code"], 503)

    def test_map_os_error(self) -> None:
        err = map_os_error(FileNotFoundError(errno.ENOENT, "gone"), path="/a")
        self.assertIsInstance(err, NotFoundError)
        self.assertEqual(err.details["path"], "/a")

        err = map_os_error(FileExistsError(errno.EEXIST, "there"))
        self.assertIsInstance(err, AlreadyExistsError)

        err = map_os_error(OSError(errno.ENOTEMPTY, "not empty"))
        self.assertIsInstance(err, AlreadyExistsError)

        err = map_os_error(PermissionError(errno.EACCES, "denied"))
        self.assertIsInstance(err, PermissionDeniedError)

        err = map_os_error(OSError(errno.EIO, "io"))
        self.assertIs(type(err), BackendError)
        self.assertEqual(err.details["errno"], errno.EIO)


if __name__ == "__main__":
    unittest.main()
