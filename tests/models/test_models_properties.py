import unittest
from datetime import datetime, timezone

from unistore.models import BasicProperties, CollisionPolicy, ExistenceState, FileAccess


class TestBasicProperties(unittest.TestCase):
    def test_defaults(self) -> None:
        dt = datetime(2025, 1, 1, tzinfo=timezone.utc)
        props = BasicProperties(date_modified=dt)
        self.assertEqual(props.size, 0)
        self.assertEqual(props.date_modified, dt)

    def test_rejects_naive_datetime(self) -> None:
        with self.assertRaises(ValueError):
            BasicProperties(date_modified=datetime(2025, 1, 1))

    def test_rejects_negative_size(self) -> None:
        dt = datetime(2025, 1, 1, tzinfo=timezone.utc)
        with self.assertRaises(ValueError):
            BasicProperties(date_modified=dt, size=-1)

    def test_is_frozen(self) -> None:
        props = BasicProperties(date_modified=datetime(2025, 1, 1, tzinfo=timezone.utc))
        with self.assertRaises(AttributeError):
            props.size = 3  # type: ignore[misc]


class TestEnums(unittest.TestCase):
    def test_values_round_trip_from_strings(self) -> None:
        self.assertIs(CollisionPolicy("GENERATE_UNIQUE_NAME"), CollisionPolicy.GENERATE_UNIQUE_NAME)
        self.assertIs(ExistenceState("FOLDER_EXISTS"), ExistenceState.FOLDER_EXISTS)
        self.assertIs(FileAccess("READ_AND_WRITE"), FileAccess.READ_AND_WRITE)


if __name__ == "__main__":
    unittest.main()
