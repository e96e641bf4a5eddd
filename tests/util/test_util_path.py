import unittest

from unistore.util.path import (
    combine,
    is_root,
    is_within,
    name_of,
    normalize,
    parent_of,
    split_name,
)


class TestUtilPath(unittest.TestCase):
    def test_normalize(self) -> None:
        self.assertEqual(normalize(""), "/")
        self.assertEqual(normalize("/"), "/")
        self.assertEqual(normalize("a//b/"), "/a/b")

    def test_normalize_rejects_non_str(self) -> None:
        with self.assertRaises(TypeError):
            normalize(None)  # type: ignore[arg-type]

    def test_combine_plain(self) -> None:
        self.assertEqual(combine("/docs", "a.txt"), "/docs/a.txt")
        self.assertEqual(combine("/", "a.txt"), "/a.txt")

    def test_combine_trailing_separator_is_redundant(self) -> None:
        self.assertEqual(combine("/docs/", "a.txt"), combine("/docs", "a.txt"))

    def test_combine_absolute_leaf_replaces_base(self) -> None:
        self.assertEqual(combine("/docs", "/other/b"), "/other/b")

    def test_combine_empty_leaf(self) -> None:
        self.assertEqual(combine("/docs/", ""), "/docs")

    def test_parent_and_name(self) -> None:
        self.assertIsNone(parent_of("/"))
        self.assertEqual(parent_of("/a"), "/")
        self.assertEqual(parent_of("/a/b"), "/a")
        self.assertEqual(name_of("/a/b.txt"), "b.txt")
        self.assertEqual(name_of("/"), "")
        self.assertTrue(is_root("//"))

    def test_split_name(self) -> None:
        self.assertEqual(split_name("a.txt"), ("a", ".txt"))
        self.assertEqual(split_name("archive.tar.gz"), ("archive.tar", ".gz"))
        self.assertEqual(split_name("README"), ("README", ""))
        self.assertEqual(split_name(".bashrc"), (".bashrc", ""))

    def test_is_within(self) -> None:
        self.assertTrue(is_within("/a", "/a"))
        self.assertTrue(is_within("/a/b/c", "/a"))
        self.assertTrue(is_within("/anything", "/"))
        self.assertFalse(is_within("/ab", "/a"))
        self.assertFalse(is_within("/", "/a"))


if __name__ == "__main__":
    unittest.main()
