"""
Tests for path string utilities.
"""

import unittest

from ..utils.paths import PathUtils


class TestReplaceSuffix(unittest.TestCase):
    """Test cases for suffix-anchored replacement."""

    def test_replaces_trailing_token(self):
        self.assertEqual(PathUtils.replace_suffix("a/b/c.vmat", ".vmat", "_color.png"), "a/b/c_color.png")

    def test_only_last_occurrence_is_replaced(self):
        path = "C:\\mods\\old.vmat\\wood.vmat"
        self.assertEqual(
            PathUtils.replace_suffix(path, ".vmat", "_color.png"),
            "C:\\mods\\old.vmat\\wood_color.png",
        )

    def test_non_matching_path_is_unchanged(self):
        self.assertEqual(PathUtils.replace_suffix("a/b/c.txt", ".vmat", "_color.png"), "a/b/c.txt")

    def test_empty_token_is_unchanged(self):
        self.assertEqual(PathUtils.replace_suffix("a/b/c.vmat", "", "x"), "a/b/c.vmat")


class TestSegments(unittest.TestCase):
    """Test cases for separator-aware segment helpers."""

    def test_segments_with_mixed_separators(self):
        self.assertEqual(
            PathUtils.segments("C:\\x/y\\z.vmat"),
            [(0, "C:"), (3, "x"), (5, "y"), (7, "z.vmat")],
        )

    def test_find_directory_segment_is_case_insensitive(self):
        path = "/game/MATERIALS/wood/oak.vmat"
        self.assertEqual(PathUtils.find_directory_segment(path, "materials"), 6)

    def test_file_name_never_matches(self):
        self.assertIsNone(PathUtils.find_directory_segment("/game/wood/materials", "materials"))

    def test_partial_segment_does_not_match(self):
        self.assertIsNone(PathUtils.find_directory_segment("/game/rawmaterials/oak.vmat", "materials"))
        self.assertIsNone(PathUtils.find_directory_segment("/game/wood/nonmaterialsfile.vmat", "materials"))

    def test_leading_segment_needs_separator_in_front(self):
        self.assertIsNone(PathUtils.find_directory_segment("materials/wood/oak.vmat", "materials"))

    def test_first_occurrence_wins(self):
        path = "/a/materials/b/Materials/c.vmat"
        self.assertEqual(PathUtils.find_directory_segment(path, "materials"), 3)


if __name__ == "__main__":
    unittest.main()
