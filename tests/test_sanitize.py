"""Tests for input sanitization."""

import unittest

from careerbot.utils.sanitize import MAX_INPUT_LENGTH, sanitize_input, sanitize_url


class TestSanitizeInput(unittest.TestCase):
    def test_blank_or_non_string_input_is_empty(self):
        for raw in [None, "", "   ", "\n\t", 42, ["a"]]:
            with self.subTest(raw=raw):
                self.assertEqual(sanitize_input(raw), "")

    def test_plain_question_is_unchanged(self):
        question = "What skills do I need for a data scientist role?"
        self.assertEqual(sanitize_input(question), question)

    def test_markup_and_control_characters_are_neutralized(self):
        samples = [
            "<script>alert('x')</script>hello",
            "hello <img src=x onerror=alert(1)>",
            "<b>bold</b> text",
            "click javascript:alert(1)",
            "a < b > c",
            "broken <tag",
            "null\x00byte\x1bescape\x7f",
        ]
        for raw in samples:
            with self.subTest(raw=raw):
                cleaned = sanitize_input(raw)
                self.assertNotIn("<", cleaned)
                self.assertNotIn(">", cleaned)
                self.assertNotIn("javascript:", cleaned.lower())
                self.assertNotIn("onerror=", cleaned.lower())
                self.assertFalse(any(ord(c) < 32 or 127 <= ord(c) < 160 for c in cleaned))

    def test_comparisons_are_escaped_not_stripped(self):
        self.assertEqual(
            sanitize_input("salary 5 < 6 and 7 > 3 years"),
            "salary 5 &lt; 6 and 7 &gt; 3 years",
        )

    def test_ampersands_and_quotes_are_kept(self):
        self.assertEqual(sanitize_input("R&D \"lead\" at O'Brien's"), "R&D \"lead\" at O'Brien's")

    def test_html_comments_are_removed(self):
        self.assertEqual(sanitize_input("senior <!-- hidden --> engineer"), "senior engineer")

    def test_script_content_is_dropped(self):
        self.assertEqual(sanitize_input("<script>steal()</script>Data Scientist"), "Data Scientist")

    def test_whitespace_is_collapsed(self):
        self.assertEqual(sanitize_input("  senior \n\n data\tscientist  "), "senior data scientist")

    def test_output_is_length_capped(self):
        self.assertEqual(len(sanitize_input("a" * (MAX_INPUT_LENGTH + 500))), MAX_INPUT_LENGTH)

    def test_sanitizing_twice_is_stable(self):
        once = sanitize_input("R&D <lead> role")
        self.assertEqual(sanitize_input(once), once)


class TestSanitizeUrl(unittest.TestCase):
    def test_url_requires_http_scheme(self):
        self.assertEqual(sanitize_url("https://www.linkedin.com/in/someone/"), "https://www.linkedin.com/in/someone/")
        self.assertEqual(sanitize_url("  https://linkedin.com/in/x  "), "https://linkedin.com/in/x")
        self.assertEqual(sanitize_url("javascript:alert(1)"), "")
        self.assertEqual(sanitize_url("ftp://example.com"), "")
        self.assertEqual(sanitize_url("https://linkedin.com/in/<script>"), "")
        self.assertEqual(sanitize_url(""), "")
        self.assertEqual(sanitize_url(None), "")


if __name__ == "__main__":
    unittest.main()
