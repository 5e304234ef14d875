# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

import pytest

from header_warden.analysis import Line, LineClassifier, LineKind, classify_line
from header_warden.analysis.classifier import (begins_with_comment, identifier_pattern,
                                               remove_comment)


def _classify(text, number=1):
    return classify_line(Line(number, text))


class TestHelpers:
    def test_begins_with_comment(self):
        assert begins_with_comment("// note")
        assert begins_with_comment("/* block")
        assert begins_with_comment("* block body")
        assert not begins_with_comment("int x = 1; // trailing")
        assert not begins_with_comment("")

    def test_remove_comment(self):
        assert remove_comment("int x = 5; // use std::cout") == "int x = 5; "
        assert remove_comment("no comment here") == "no comment here"
        assert remove_comment("") == ""

    def test_identifier_pattern_requires_word_after_colons(self):
        pattern = identifier_pattern("std")
        assert pattern.findall("std::sort(a); std::") == ["std::sort"]
        assert pattern.findall("std::vector<std::string>") == ["std::vector", "std::string"]


class TestClassifyLine:
    @pytest.mark.parametrize("text", ["", "   ", "\t \t"])
    def test_blank_lines(self, text):
        result = _classify(text)
        assert result.kind is LineKind.BLANK
        assert result.identifiers == ()

    @pytest.mark.parametrize(
        "text",
        [
            "// The output can be printed using std::cout.",
            "/* std::cout */",
            " * The output can be printed using std::cout.",
            "   */",
        ],
    )
    def test_comment_lines_are_skipped(self, text):
        result = _classify(text)
        assert result.kind is LineKind.COMMENT
        assert result.identifiers == ()

    def test_leading_dereference_is_treated_as_comment(self):
        # Known limitation of the block comment heuristic
        result = _classify("*ptr = std::move(value);")
        assert result.kind is LineKind.COMMENT

    def test_bare_include(self):
        result = _classify("#include <iostream>")
        assert result.kind is LineKind.BARE_INCLUDE
        assert result.header == "#include <iostream>"
        assert result.identifiers == ()

    def test_include_header_is_normalized(self):
        assert _classify("        #INCLUDE <FMT/CORE.H>").header == "#include <fmt/core.h>"
        assert _classify("#include<pathmaster/pathmaster.hpp>").header == (
            "#include <pathmaster/pathmaster.hpp>"
        )

    def test_annotated_include_keeps_comment_identifiers(self):
        result = _classify("#include <iostream>  // for std::cout")
        assert result.kind is LineKind.ANNOTATED_INCLUDE
        assert result.header == "#include <iostream>"
        assert result.identifiers == ("std::cout",)

    def test_annotated_include_identifier_order_and_duplicates(self):
        result = _classify("#include <algorithm>//for std::find, STD::TRANSFORM, std::find")
        assert result.identifiers == ("std::find", "std::transform", "std::find")

    def test_quoted_include_is_ignored(self):
        result = _classify('#include "args.hpp"')
        assert result.kind is LineKind.OTHER

    def test_usage_line_yields_every_occurrence(self):
        result = _classify("std::vector<std::string> result;")
        assert result.kind is LineKind.USAGE
        assert result.identifiers == ("std::vector", "std::string")

    def test_trailing_comment_is_stripped_on_code_lines(self):
        result = _classify("int x = 5; // Use std::cout to print it")
        assert result.kind is LineKind.OTHER
        assert result.identifiers == ()

    def test_case_insensitive_matching(self):
        upper = _classify("STD::SORT(RESULT.BEGIN(), RESULT.END());")
        lower = _classify("std::sort(result.begin(), result.end());")
        assert upper.identifiers == lower.identifiers == ("std::sort",)
        assert upper.line.text == "STD::SORT(RESULT.BEGIN(), RESULT.END());"

    def test_other_namespace(self):
        result = classify_line(Line(1, "fmt::print(x); std::sort(v);"), namespace="fmt")
        assert result.kind is LineKind.USAGE
        assert result.identifiers == ("fmt::print",)

    def test_classification_is_deterministic(self):
        line = Line(7, "#include <string>  // for std::string")
        assert classify_line(line) == classify_line(line)


class TestLineClassifier:
    def test_accumulates_working_sets(self):
        classifier = LineClassifier()
        classifier.feed_all(
            [
                Line(1, "#include <iostream>"),
                Line(2, "#include <string>  // for std::string"),
                Line(3, "std::string a = std::string();"),
                Line(4, "// std::cout"),
            ]
        )

        assert [b.line.number for b in classifier.bare_includes] == [1]
        assert classifier.annotated_includes[0].identifiers == ("std::string",)
        assert [(u.line.number, u.identifier) for u in classifier.usages] == [
            (3, "std::string"),
            (3, "std::string"),
        ]
        # The same Line record is shared by every usage on that line
        assert classifier.usages[0].line is classifier.usages[1].line

    def test_feed_returns_classification(self):
        classifier = LineClassifier()
        result = classifier.feed(Line(1, "#include <vector>"))
        assert result.kind is LineKind.BARE_INCLUDE
