"""
Tests for the Style Merger.
"""

from ui_switcheroo.core.styles import merge_styles
from ui_switcheroo.semantics.schema import StyleRule

MARGIN = StyleRule(pattern="m-([0-5])", style={"margin": "{1}"}, cast="int")
DANGER = StyleRule(pattern="text-danger", style={"color": "error.main"})


def test_packaged_rules(registry):
  result = merge_styles(None, "d-flex mt-3 custom", registry.style_rules)
  assert result.derived == {"display": "flex", "mt": 3}
  assert result.style == {"display": "flex", "mt": 3}
  assert result.remaining_class == "custom"
  assert result.consumed


def test_existing_entries_win():
  result = merge_styles({"color": "red"}, "text-danger m-2", [MARGIN, DANGER])
  assert result.style == {"color": "red", "margin": 2}
  assert list(result.style) == ["color", "margin"]
  assert result.derived == {"margin": 2}
  assert result.remaining_class == ""


def test_first_matching_rule_wins():
  other = StyleRule(pattern="m-(\\d)", style={"m": "{1}"})
  result = merge_styles(None, "m-2", [MARGIN, other])
  assert result.derived == {"margin": 2}


def test_earlier_token_wins():
  result = merge_styles(None, "m-2 m-4", [MARGIN])
  assert result.derived == {"margin": 2}
  assert result.remaining_class == ""


def test_nothing_matched_returns_existing_unchanged():
  existing = {"color": "red"}
  result = merge_styles(existing, "  card  shadow-xl ", [MARGIN])
  assert result.style is existing
  assert result.remaining_class == "card shadow-xl"
  assert not result.consumed


def test_consumed_without_new_keys():
  existing = {"margin": 0}
  result = merge_styles(existing, "m-3", [MARGIN])
  assert result.consumed
  assert result.derived == {}
  assert result.style is existing


def test_multi_key_rule(registry):
  result = merge_styles(None, "text-truncate", registry.style_rules)
  assert result.derived == {"overflow": "hidden", "textOverflow": "ellipsis", "whiteSpace": "nowrap"}


def test_cast_falls_back_to_string(registry):
  result = merge_styles(None, "mx-auto", registry.style_rules)
  assert result.derived == {"mx": "auto"}


def test_breakpoint_utilities(registry):
  result = merge_styles(None, "d-md-none text-lg-center mt-lg-3 ms-sm-auto", registry.style_rules)
  assert result.derived == {
    "display": {"md": "none"},
    "textAlign": {"lg": "center"},
    "mt": {"lg": 3},
    "ml": {"sm": "auto"},
  }
  assert result.remaining_class == ""


def test_responsive_values_for_one_key_are_combined(registry):
  result = merge_styles(None, "d-none d-md-flex d-lg-block", registry.style_rules)
  assert result.derived == {"display": {"xs": "none", "md": "flex", "lg": "block"}}


def test_plain_value_after_breakpoint_becomes_xs(registry):
  result = merge_styles(None, "mt-md-4 mt-2", registry.style_rules)
  assert result.derived == {"mt": {"md": 4, "xs": 2}}


def test_existing_key_blocks_responsive_value(registry):
  result = merge_styles({"display": "grid"}, "d-md-none", registry.style_rules)
  assert result.derived == {}
  assert result.consumed


def test_responsive_rule_in_schema():
  rule = StyleRule(pattern="p-(sm|md)-([0-5])", style={"p": {"{1}": "{2}"}}, cast="int")
  assert rule.to_style(rule.match("p-md-2")) == {"p": {"md": 2}}
