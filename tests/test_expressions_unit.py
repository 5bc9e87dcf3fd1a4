import os
import tempfile
import unittest

from html_templates.html_renderer.expressions import ExpressionDictionary

INI_TEXT = """
greeting = "Hello, %s!"
Title = Welcome

[Date]
short = "dd.MM.YYYY"
Long = MMMM dd, YYYY
"""


class TestExpressionDictionary(unittest.TestCase):
    def test_plain_and_sectioned_keys(self):
        expressions = ExpressionDictionary.from_string(INI_TEXT)
        self.assertEqual(
            dict(expressions),
            {
                "greeting": "Hello, %s!",
                "title": "Welcome",
                "date.short": "dd.MM.YYYY",
                "date.long": "MMMM dd, YYYY",
            },
        )

    def test_lookup_is_case_insensitive(self):
        expressions = ExpressionDictionary.from_string(INI_TEXT)
        self.assertEqual(expressions.lookup("Date.Short"), "dd.MM.YYYY")
        self.assertEqual(expressions["TITLE"], "Welcome")

    def test_lookup_miss_returns_value(self):
        expressions = ExpressionDictionary({"a": "b"})
        self.assertEqual(expressions.lookup("unknown"), "unknown")
        self.assertEqual(expressions.lookup(3), 3)

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as folder:
            path = os.path.join(folder, "expressions.ini")
            with open(path, "w", encoding="utf-8") as f:
                f.write(INI_TEXT)
            expressions = ExpressionDictionary.from_file(path)
        self.assertEqual(len(expressions), 4)

    def test_merged_returns_new_dictionary(self):
        first = ExpressionDictionary({"a": "1", "b": "2"})
        merged = first.merged(ExpressionDictionary({"B": "3"}))
        self.assertEqual(dict(merged), {"a": "1", "b": "3"})
        self.assertEqual(first["b"], "2")


if __name__ == "__main__":
    unittest.main()
