import threading
import unittest

from unistore.core.cancellation import CancellationToken
from unistore.core.dispatch import run_off_main_thread
from unistore.errors import BackendError, NotFoundError, OperationCancelledError


class TestRunOffMainThread(unittest.IsolatedAsyncioTestCase):
    async def test_runs_on_worker_thread(self) -> None:
        main = threading.get_ident()
        result = await run_off_main_thread(threading.get_ident)
        self.assertNotEqual(result, main)

    async def test_passes_arguments(self) -> None:
        self.assertEqual(await run_off_main_thread(max, 1, 5, 3), 5)

    async def test_cancelled_token_skips_work(self) -> None:
        calls: list[int] = []
        token = CancellationToken()
        token.cancel()
        with self.assertRaises(OperationCancelledError):
            await run_off_main_thread(calls.append, 1, cancel=token)
        self.assertEqual(calls, [])

    async def test_unistore_errors_propagate_unchanged(self) -> None:
        err = NotFoundError("gone")

        def _fail() -> None:
            raise err

        with self.assertRaises(NotFoundError) as ctx:
            await run_off_main_thread(_fail)
        self.assertIs(ctx.exception, err)

    async def test_other_errors_are_wrapped(self) -> None:
        def _boom() -> None:
            raise RuntimeError("boom")

        with self.assertRaises(BackendError) as ctx:
            await run_off_main_thread(_boom)
        self.assertIsInstance(ctx.exception.cause, RuntimeError)
        self.assertEqual(ctx.exception.details["operation"], "_boom")


if __name__ == "__main__":
    unittest.main()
