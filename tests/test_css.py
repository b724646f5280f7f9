"""
Tests for the CSS rule mutator.
"""

import pytest

from jsmods.exceptions import ParseError
from jsmods.mutation import css_module_imported, ensure_hide_scrollbar


NEW_RULE = ".hide-scrollbar {\n  display: none;\n}\n"


class TestEnsureHideScrollbar:
    """Test the .hide-scrollbar rule."""

    def test_appended_when_missing(self):
        source = "body {\n  margin: 0;\n}\n"
        assert ensure_hide_scrollbar(source) == source + "\n" + NEW_RULE

    def test_appended_without_final_newline(self):
        assert ensure_hide_scrollbar("body { margin: 0 }") == "body { margin: 0 }\n\n" + NEW_RULE

    def test_empty_stylesheet(self):
        assert ensure_hide_scrollbar("") == NEW_RULE
        assert ensure_hide_scrollbar("\n\n") == NEW_RULE

    def test_already_compliant(self):
        source = ".hide-scrollbar {\n  display: none;\n}\n"
        assert ensure_hide_scrollbar(source) == source

    def test_compliant_with_uppercase_value(self):
        source = ".hide-scrollbar { display: NONE }"
        assert ensure_hide_scrollbar(source) == source

    def test_declaration_appended(self):
        source = ".hide-scrollbar {\n  scrollbar-width: none;\n}\n"
        assert ensure_hide_scrollbar(source) == (
            ".hide-scrollbar {\n  scrollbar-width: none;\n  display: none;\n}\n"
        )

    def test_missing_semicolon_added(self):
        source = ".hide-scrollbar { scrollbar-width: none }"
        assert ensure_hide_scrollbar(source) == ".hide-scrollbar { scrollbar-width: none; display: none; }"

    def test_empty_rule(self):
        assert ensure_hide_scrollbar(".hide-scrollbar {}") == ".hide-scrollbar { display: none; }"
        assert ensure_hide_scrollbar(".hide-scrollbar {\n}\n") == ".hide-scrollbar {\n  display: none;\n}\n"

    def test_other_display_value(self):
        result = ensure_hide_scrollbar(".hide-scrollbar {\n  display: block;\n}\n")
        assert result == ".hide-scrollbar {\n  display: block;\n  display: none;\n}\n"

    def test_comments_and_other_rules_kept(self, app_css):
        result = ensure_hide_scrollbar(app_css)
        assert result == app_css.replace(
            "    scrollbar-width: none; /* Firefox */\n",
            "    scrollbar-width: none; /* Firefox */\n    display: none;\n",
        )

    def test_pseudo_selector_is_a_different_rule(self):
        source = ".hide-scrollbar::-webkit-scrollbar {\n  display: none;\n}\n"
        assert ensure_hide_scrollbar(source) == source + "\n" + NEW_RULE

    def test_only_first_rule_is_extended(self):
        source = ".hide-scrollbar { color: red; }\n.hide-scrollbar { color: blue; }\n"
        result = ensure_hide_scrollbar(source)
        assert result == ".hide-scrollbar { color: red; display: none; }\n.hide-scrollbar { color: blue; }\n"

    def test_indented_rule(self):
        source = "@media (max-width: 600px) {\n  .x { color: red; }\n}\n  .hide-scrollbar {\n    color: red;\n  }\n"
        result = ensure_hide_scrollbar(source)
        assert result.endswith("  .hide-scrollbar {\n    color: red;\n    display: none;\n  }\n")

    def test_idempotent(self, app_css):
        once = ensure_hide_scrollbar(app_css)
        assert ensure_hide_scrollbar(once) == once

    def test_invalid_declaration_is_skipped(self):
        result = ensure_hide_scrollbar(".hide-scrollbar { color red; }")
        assert result == ".hide-scrollbar { color red; display: none; }"

    def test_invalid_declaration_next_to_display(self):
        source = ".hide-scrollbar {\n  color red;\n  display: none;\n}\n"
        assert ensure_hide_scrollbar(source) == source

    def test_crlf_declaration_appended(self):
        source = ".hide-scrollbar {\r\n  color: red;\r\n}\r\n"
        assert ensure_hide_scrollbar(source) == ".hide-scrollbar {\r\n  color: red;\r\n  display: none;\r\n}\r\n"

    def test_crlf_rule_appended(self):
        source = "body {\r\n  margin: 0;\r\n}\r\n"
        assert ensure_hide_scrollbar(source) == source + "\r\n" + NEW_RULE.replace("\n", "\r\n")

    def test_crlf_empty_rule(self):
        source = ".hide-scrollbar {\r\n}\r\n"
        assert ensure_hide_scrollbar(source) == ".hide-scrollbar {\r\n  display: none;\r\n}\r\n"

    def test_parse_error(self):
        with pytest.raises(ParseError):
            ensure_hide_scrollbar(".hide-scrollbar")


class TestCssModuleImported:
    """Test @import lookup."""

    def test_string_and_url(self, app_css):
        assert css_module_imported(app_css, "tailwindcss/base")
        assert css_module_imported(app_css, "theme.css")

    def test_unquoted_url(self):
        assert css_module_imported("@import url(reset.css);", "reset.css")

    def test_not_imported(self, app_css):
        assert not css_module_imported(app_css, "main.css")
        assert not css_module_imported("", "main.css")

    def test_media_query_import(self):
        assert css_module_imported('@import "print.css" print;', "print.css")
