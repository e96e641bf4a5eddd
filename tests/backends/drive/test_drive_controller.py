import json
import unittest
from datetime import datetime, timezone
from unittest.mock import Mock, patch

from googleapiclient.errors import HttpError

from unistore.backends.drive.controller import (
    GoogleDriveController,
    RetryPolicy,
    _escape_query,
    _file_dict_to_info,
)
from unistore.errors import BackendError, NetworkError, NotFoundError, RateLimitError
from unistore.util.mime import FOLDER_MIME


def _http_error(status: int, reason: str = "", body: dict | None = None) -> HttpError:
    resp = Mock()
    resp.status = status
    resp.reason = reason
    return HttpError(resp=resp, content=json.dumps(body or {}).encode("utf-8"))


class TestDriveControllerHelpers(unittest.TestCase):
    def test_file_dict_to_info_parses_fields(self) -> None:
        dt = datetime(2025, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        info = _file_dict_to_info(
            {
                "id": "F1",
                "name": "n",
                "mimeType": "text/plain",
                "parents": ["P1"],
                "modifiedTime": "2025-01-01T00:00:00Z",
                "size": "123",
            }
        )
        self.assertEqual(info.file_id, "F1")
        self.assertEqual(info.parents, ["P1"])
        self.assertEqual(info.size, 123)
        self.assertEqual(info.modified_time, dt)
        self.assertFalse(info.is_folder)

    def test_file_dict_to_info_tolerates_missing_fields(self) -> None:
        info = _file_dict_to_info({"id": "D", "mimeType": FOLDER_MIME, "modifiedTime": "bad"})
        self.assertTrue(info.is_folder)
        self.assertIsNone(info.modified_time)
        self.assertIsNone(info.size)

    def test_escape_query(self) -> None:
        self.assertEqual(_escape_query("it's"), "it\\'s")
        self.assertEqual(_escape_query("a\\b"), "a\\\\b")


class TestDriveControllerMocked(unittest.TestCase):
    def setUp(self) -> None:
        self.service = Mock()
        self.files = Mock()
        self.service.files.return_value = self.files

    def _list_returns(self, *pages: dict) -> None:
        req = Mock()
        req.execute.side_effect = list(pages)
        self.files.list.return_value = req

    def test_list_children_follows_pages_and_drive_kwargs(self) -> None:
        self._list_returns(
            {"files": [{"id": "A", "name": "a", "mimeType": "text/plain"}], "nextPageToken": "t"},
            {"files": [{"id": "B", "name": "b", "mimeType": FOLDER_MIME}]},
        )
        controller = GoogleDriveController.from_service(self.service, supports_all_drives=True)

        children = controller.list_children("P1")

        self.assertEqual([c.file_id for c in children], ["A", "B"])
        kwargs = self.files.list.call_args.kwargs
        self.assertTrue(kwargs.get("supportsAllDrives"))
        self.assertTrue(kwargs.get("includeItemsFromAllDrives"))
        self.assertIn("'P1' in parents", kwargs["q"])
        self.assertIn("trashed=false", kwargs["q"])
        self.assertEqual(kwargs["pageToken"], "t")

    def test_without_all_drives_kwargs(self) -> None:
        self._list_returns({"files": []})
        controller = GoogleDriveController.from_service(self.service, supports_all_drives=False)
        controller.list_children("P1")
        self.assertNotIn("supportsAllDrives", self.files.list.call_args.kwargs)

    def test_find_child_requires_exact_name(self) -> None:
        self._list_returns(
            {
                "files": [
                    {"id": "X", "name": "A.txt", "mimeType": "text/plain"},
                    {"id": "Y", "name": "a.txt", "mimeType": "text/plain"},
                ]
            }
        )
        controller = GoogleDriveController.from_service(self.service)

        found = controller.find_child("P1", "a.txt")

        self.assertEqual(found.file_id, "Y")
        self.assertIn("name = 'a.txt'", self.files.list.call_args.kwargs["q"])

    def test_move_swaps_parents_and_renames(self) -> None:
        get_req = Mock()
        get_req.execute.return_value = {"parents": ["OLD"]}
        self.files.get.return_value = get_req
        upd_req = Mock()
        upd_req.execute.return_value = {"id": "F", "name": "n2", "mimeType": "text/plain"}
        self.files.update.return_value = upd_req
        controller = GoogleDriveController.from_service(self.service)

        controller.move("F", "NEW", new_name="n2")

        kwargs = self.files.update.call_args.kwargs
        self.assertEqual(kwargs["addParents"], "NEW")
        self.assertEqual(kwargs["removeParents"], "OLD")
        self.assertEqual(kwargs["body"], {"name": "n2"})

    def test_get_maps_http_404_to_not_found(self) -> None:
        req = Mock()
        req.execute.side_effect = _http_error(404, "Not Found")
        self.files.get.return_value = req
        controller = GoogleDriveController.from_service(self.service)

        with self.assertRaises(NotFoundError):
            controller.get("X")
        self.assertEqual(req.execute.call_count, 1)

    def test_retry_on_429(self) -> None:
        err = _http_error(
            429,
            "rateLimitExceeded",
            {"error": {"message": "rate limited", "errors": [{"reason": "rateLimitExceeded"}]}},
        )
        req = Mock()
        req.execute.side_effect = [
            err,
            err,
            {"id": "F1", "name": "n", "mimeType": "text/plain", "parents": []},
        ]
        self.files.get.return_value = req
        controller = GoogleDriveController.from_service(self.service)

        with patch("time.sleep", return_value=None) as sleep:
            info = controller.get("F1")

        self.assertEqual(info.file_id, "F1")
        self.assertEqual(req.execute.call_count, 3)
        self.assertEqual([c.args[0] for c in sleep.call_args_list], [1.0, 2.0])

    def test_retries_are_bounded(self) -> None:
        req = Mock()
        req.execute.side_effect = _http_error(503, "Service Unavailable")
        self.files.get.return_value = req
        controller = GoogleDriveController.from_service(
            self.service, retry_policy=RetryPolicy(max_retries=2, initial_delay_sec=0.0)
        )

        with patch("time.sleep", return_value=None):
            with self.assertRaises(BackendError) as ctx:
                controller.get("F1")

        self.assertEqual(ctx.exception.details["status_code"], 503)
        self.assertEqual(req.execute.call_count, 3)

    def test_network_errors_are_mapped(self) -> None:
        req = Mock()
        req.execute.side_effect = ConnectionResetError("reset")
        self.files.get.return_value = req
        controller = GoogleDriveController.from_service(
            self.service, retry_policy=RetryPolicy(max_retries=0)
        )

        with self.assertRaises(NetworkError):
            controller.get("F1")

    def test_map_429_to_rate_limit_error(self) -> None:
        req = Mock()
        req.execute.side_effect = _http_error(429, "Too Many Requests")
        self.files.get.return_value = req
        controller = GoogleDriveController.from_service(
            self.service, retry_policy=RetryPolicy(max_retries=0)
        )

        with self.assertRaises(RateLimitError):
            controller.get("F1")


if __name__ == "__main__":
    unittest.main()
