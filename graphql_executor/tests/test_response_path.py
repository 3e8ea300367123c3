# Copyright 2021-present Kensho Technologies, LLC.
import unittest

from ..execution.response_path import ResponsePath, add_path_key


class ResponsePathTests(unittest.TestCase):
    def test_as_list(self) -> None:
        root_path = add_path_key(None, "animals")
        item_path = root_path.add_key(2)
        field_path = item_path.add_key("name")

        self.assertEqual(["animals"], root_path.as_list())
        self.assertEqual(["animals", 2, "name"], field_path.as_list())
        self.assertEqual(2, field_path.depth)
        self.assertIs(item_path, field_path.prev)

    def test_extending_a_path_leaves_it_unchanged(self) -> None:
        parent_path = ResponsePath("animal")
        first_child = parent_path.add_key("name")
        second_child = parent_path.add_key("species")

        self.assertEqual(["animal"], parent_path.as_list())
        self.assertEqual(["animal", "name"], first_child.as_list())
        self.assertEqual(["animal", "species"], second_child.as_list())

    def test_equality(self) -> None:
        self.assertEqual(ResponsePath(1, ResponsePath("a")), ResponsePath("a").add_key(1))
        self.assertNotEqual(ResponsePath(1, ResponsePath("a")), ResponsePath(1, ResponsePath("b")))
        self.assertNotEqual(ResponsePath("a"), ResponsePath("b", ResponsePath("a")))
