"""
Unit tests for classifier.py

Tests line classification priority and each category.
"""

import unittest

from outline.classifier import (
    LineKind,
    classify_line,
    is_doc_comment,
    is_line_comment,
    is_public_item,
)


class TestDocComments(unittest.TestCase):
    """Test documentation comment detection."""

    def test_top_level_doc_comment(self):
        self.assertEqual(classify_line("/// Adds two numbers."), LineKind.DOC_COMMENT)

    def test_indented_doc_comment(self):
        self.assertEqual(classify_line("    /// Field docs"), LineKind.DOC_COMMENT)

    def test_inner_doc_comment_is_plain_comment(self):
        """``//!`` is not an outer doc comment."""
        self.assertEqual(classify_line("//! Crate docs"), LineKind.LINE_COMMENT)

    def test_doc_comment_mentioning_fn(self):
        """Doc comments win over declaration keywords."""
        self.assertEqual(classify_line("/// fn example() {}"), LineKind.DOC_COMMENT)

    def test_is_doc_comment_helper(self):
        self.assertTrue(is_doc_comment("///"))
        self.assertFalse(is_doc_comment("// plain"))


class TestDeclarationStarts(unittest.TestCase):
    """Test function and struct/enum start detection."""

    def test_function(self):
        self.assertEqual(classify_line("fn main() {"), LineKind.FUNCTION_START)

    def test_public_function(self):
        self.assertEqual(classify_line("pub fn run(x: u8) -> u8 {"), LineKind.FUNCTION_START)

    def test_indented_function_is_not_top_level(self):
        self.assertEqual(classify_line("    fn helper() {"), LineKind.OTHER)

    def test_keyword_prefix_is_not_function(self):
        self.assertEqual(classify_line("fnord = 1;"), LineKind.OTHER)

    def test_struct_and_enum(self):
        self.assertEqual(classify_line("struct Point {"), LineKind.STRUCT_OR_ENUM_START)
        self.assertEqual(classify_line("pub struct Unit;"), LineKind.STRUCT_OR_ENUM_START)
        self.assertEqual(classify_line("enum Color {"), LineKind.STRUCT_OR_ENUM_START)
        self.assertEqual(classify_line("pub enum Shape {"), LineKind.STRUCT_OR_ENUM_START)

    def test_static_item(self):
        self.assertEqual(
            classify_line('static NAME: &str = "x";'), LineKind.STATIC_ITEM
        )


class TestPublicItems(unittest.TestCase):
    """Test the catch-all public item rule."""

    def test_public_items(self):
        for line in (
            "pub mod tools;",
            "pub const LIMIT: usize = 10;",
            "pub trait Render {",
            "pub type Id = u64;",
            "pub async fn fetch() {",
        ):
            with self.subTest(line=line):
                self.assertEqual(classify_line(line), LineKind.PUBLIC_ITEM)

    def test_pub_use_is_ignored(self):
        self.assertFalse(is_public_item("pub use crate::models::Entry;"))
        self.assertEqual(classify_line("pub use crate::models::Entry;"), LineKind.OTHER)

    def test_restricted_visibility_is_other(self):
        self.assertEqual(classify_line("pub(crate) fn inner() {"), LineKind.OTHER)


class TestRemainingKinds(unittest.TestCase):
    """Test blank, comment/attribute and other lines."""

    def test_blank(self):
        self.assertEqual(classify_line(""), LineKind.BLANK)
        self.assertEqual(classify_line("   \t"), LineKind.BLANK)

    def test_line_comment_and_attributes(self):
        self.assertEqual(classify_line("// TODO"), LineKind.LINE_COMMENT)
        self.assertEqual(classify_line("#[derive(Debug)]"), LineKind.LINE_COMMENT)
        self.assertEqual(classify_line("    #[serde(default)]"), LineKind.LINE_COMMENT)
        self.assertEqual(classify_line("#![allow(dead_code)]"), LineKind.LINE_COMMENT)
        self.assertTrue(is_line_comment("  // note"))

    def test_other(self):
        self.assertEqual(classify_line("use std::fmt;"), LineKind.OTHER)
        self.assertEqual(classify_line("impl Point {"), LineKind.OTHER)
        self.assertEqual(classify_line("}"), LineKind.OTHER)

    def test_classification_is_pure(self):
        line = "pub struct Point { x: i32 }"
        self.assertEqual(classify_line(line), classify_line(line))


if __name__ == "__main__":
    unittest.main()
