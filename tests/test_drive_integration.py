import argparse
import asyncio
import os
import unittest
import uuid

from unistore import AuthInfo, CollisionPolicy, ExistenceState, FileSystem

DEFAULT_SCOPES = ("https://www.googleapis.com/auth/drive",)

_REQUIRED_ENV = ("UNISTORE_CLIENT_SECRETS", "UNISTORE_TOKEN_FILE", "UNISTORE_TEST_ROOT_ID")


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


@unittest.skipUnless(
    all(_env(n) for n in _REQUIRED_ENV),
    "Set UNISTORE_CLIENT_SECRETS, UNISTORE_TOKEN_FILE and UNISTORE_TEST_ROOT_ID to run",
)
class TestGoogleDriveIntegration(unittest.TestCase):
    """
    Integration test with real Google Drive.

    Required env vars:
        - UNISTORE_CLIENT_SECRETS: path to OAuth client secrets json
        - UNISTORE_TOKEN_FILE: path to token json (will be created/updated)
        - UNISTORE_TEST_ROOT_ID: Drive folder ID used as test root (safe sandbox)

    Optional:
        - UNISTORE_SCOPES: comma-separated scopes (default: full drive)
    """

    @classmethod
    def setUpClass(cls) -> None:
        scopes_raw = _env("UNISTORE_SCOPES")
        if scopes_raw:
            cls.scopes = tuple(s.strip() for s in scopes_raw.split(",") if s.strip())
        else:
            cls.scopes = DEFAULT_SCOPES

        cls.auth_info = AuthInfo(
            kind="oauth",
            data={
                "client_secrets_file": _env("UNISTORE_CLIENT_SECRETS"),
                "token_file": _env("UNISTORE_TOKEN_FILE"),
            },
        )
        cls.root_id = _env("UNISTORE_TEST_ROOT_ID")

    def test_file_and_folder_smoke(self) -> None:
        asyncio.run(self._smoke())

    async def _smoke(self) -> None:
        fs = FileSystem.drive(self.auth_info, self.root_id, scopes=self.scopes)
        work = await fs.root_folder.create_folder(
            f"unistore_it_{uuid.uuid4().hex[:8]}", CollisionPolicy.FAIL_IF_EXISTS
        )
        try:
            # create -> append -> read -> copy -> rename -> move
            f = await work.create_file("hello.txt")
            await f.append_text("hello from unistore integration test")
            self.assertEqual(
                await f.read_all_bytes(), b"hello from unistore integration test\n"
            )

            dup = await work.create_file("hello.txt", CollisionPolicy.GENERATE_UNIQUE_NAME)
            self.assertEqual(dup.name, "hello.txt (2)")

            copy = await f.copy(work.path, policy=CollisionPolicy.GENERATE_UNIQUE_NAME)
            self.assertEqual(copy.name, "hello (2).txt")

            sub = await work.create_folder("sub")
            await f.rename("renamed.txt")
            await f.move(sub.path)
            self.assertEqual(f.path, f"{sub.path}/renamed.txt")
            self.assertIs(await sub.check_exists("renamed.txt"), ExistenceState.FILE_EXISTS)
        finally:
            await work.delete()


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose unittest output",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_args()
    unittest.main(verbosity=2 if args.verbose else 1)
