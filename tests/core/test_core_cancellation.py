import threading
import unittest

from unistore.core.cancellation import CancellationToken, check_cancelled
from unistore.errors import OperationCancelledError


class TestCancellationToken(unittest.TestCase):
    def test_starts_uncancelled(self) -> None:
        token = CancellationToken()
        self.assertFalse(token.cancelled)
        token.raise_if_cancelled()

    def test_cancel_from_another_thread(self) -> None:
        token = CancellationToken()
        t = threading.Thread(target=token.cancel)
        t.start()
        t.join()
        self.assertTrue(token.cancelled)
        with self.assertRaises(OperationCancelledError):
            token.raise_if_cancelled()

    def test_check_cancelled_accepts_none(self) -> None:
        check_cancelled(None)
        token = CancellationToken()
        token.cancel()
        with self.assertRaises(OperationCancelledError):
            check_cancelled(token)


if __name__ == "__main__":
    unittest.main()
