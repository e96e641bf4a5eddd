import logging
import unittest

import unistore


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        for name in (
            "FileSystem",
            "StorageFile",
            "StorageFolder",
            "CancellationToken",
            "CollisionPolicy",
            "ExistenceState",
            "FileAccess",
            "BasicProperties",
            "MemoryBackend",
            "LocalBackend",
            "DriveBackend",
            "AuthInfo",
            "UniStoreError",
            "OperationCancelledError",
            "ProtectedRootError",
        ):
            self.assertTrue(hasattr(unistore, name), name)

    def test___all___is_defined(self) -> None:
        self.assertIn("FileSystem", unistore.__all__)
        for name in unistore.__all__:
            self.assertTrue(hasattr(unistore, name), name)

    def test_library_logger_has_null_handler(self) -> None:
        handlers = logging.getLogger("unistore").handlers
        self.assertTrue(any(isinstance(h, logging.NullHandler) for h in handlers))


if __name__ == "__main__":
    unittest.main()
