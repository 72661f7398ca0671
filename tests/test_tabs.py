"""Tests for tab variants and tab parsing."""

import pytest  # type: ignore

from docusign_node.exceptions.docusign_exceptions import FieldValidationError
from docusign_node.sources.external.docusign.tabs import (
    AbsolutePosition,
    AnchorPosition,
    FormulaTab,
    ListTab,
    MergeFieldTab,
    RadioGroupTab,
    SignHereTab,
    SimpleTab,
    TextTab,
    build_list_items,
    group_tabs,
    parse_tab,
    resolve_position,
    split_options,
)


class TestPositions:
    def test_anchor_string_wins_over_coordinates(self):
        position = resolve_position({"anchorString": "/sig/", "xPosition": "10", "yPosition": "20"})
        assert isinstance(position, AnchorPosition)
        tab = SignHereTab(document_id="1", page_number="1", position=position).to_dict()
        assert tab["anchorString"] == "/sig/"
        assert "xPosition" not in tab
        assert "yPosition" not in tab

    def test_absolute_position_defaults(self):
        position = resolve_position({})
        assert position == AbsolutePosition(x="100", y="150")


class TestListTabs:
    def test_options_are_split_and_trimmed(self):
        assert split_options(" Red, Blue ,, Green ") == ["Red", "Blue", "Green"]

    def test_only_first_item_selected_and_values_normalized(self):
        items = build_list_items(["Red", "Dark Blue", "Green"])
        assert [item["text"] for item in items] == ["Red", "Dark Blue", "Green"]
        assert [item["value"] for item in items] == ["red", "dark_blue", "green"]
        assert [item["selected"] for item in items] == ["true", "false", "false"]

    def test_parse_list_tab(self):
        tab = parse_tab({"tabType": "listTabs", "listItems": "Red, Blue, Green", "tabLabel": "color"})
        assert isinstance(tab, ListTab)
        rendered = tab.to_dict()
        assert rendered["tabLabel"] == "color"
        assert len(rendered["listItems"]) == 3
        assert rendered["listItems"][0] == {"text": "Red", "value": "red", "selected": "true"}


class TestRadioGroup:
    def test_radios_are_stacked_vertically(self):
        tab = parse_tab(
            {
                "tabType": "radioGroupTabs",
                "radioItems": "Yes, No, Maybe",
                "xPosition": 200,
                "yPosition": 300,
                "groupName": "answer",
            }
        )
        assert isinstance(tab, RadioGroupTab)
        rendered = tab.to_dict()
        assert rendered["groupName"] == "answer"
        assert [radio["yPosition"] for radio in rendered["radios"]] == ["300", "325", "350"]
        assert {radio["xPosition"] for radio in rendered["radios"]} == {"200"}
        assert all(radio["selected"] == "false" for radio in rendered["radios"])

    def test_default_group_name(self):
        tab = parse_tab({"tabType": "radioGroupTabs", "radioItems": "A"})
        assert tab.to_dict()["groupName"] == "radioGroup"

    def test_fractional_positions_are_kept(self):
        tab = parse_tab(
            {"tabType": "radioGroupTabs", "radioItems": "A, B", "xPosition": "100.5", "yPosition": "200.25"}
        )
        radios = tab.to_dict()["radios"]
        assert [radio["xPosition"] for radio in radios] == ["100.5", "100.5"]
        assert [radio["yPosition"] for radio in radios] == ["200.25", "225.25"]

    def test_non_numeric_position_is_rejected(self):
        tab = parse_tab({"tabType": "radioGroupTabs", "radioItems": "A", "xPosition": "left"})
        with pytest.raises(FieldValidationError, match="X Position must be a number"):
            tab.to_dict()


class TestOtherVariants:
    def test_formula_tab_is_always_locked(self):
        tab = parse_tab({"tabType": "formulaTabs", "formula": "[a] + [b]"})
        assert isinstance(tab, FormulaTab)
        assert tab.to_dict()["locked"] == "true"
        assert tab.to_dict()["formula"] == "[a] + [b]"

    def test_merge_field_tab(self):
        rendered = MergeFieldTab(placeholder="{{name}}", value="Ada").to_dict()
        assert rendered["tabLabel"] == "merge_{{name}}"
        assert rendered["locked"] == "true"
        assert rendered["fontSize"] == "Size12"
        assert rendered["anchorString"] == "{{name}}"

    def test_text_tab_carries_value(self):
        tab = parse_tab({"tabType": "textTabs", "value": "hello", "required": True})
        assert isinstance(tab, TextTab)
        rendered = tab.to_dict()
        assert rendered["value"] == "hello"
        assert rendered["required"] == "true"

    def test_simple_tab_keeps_its_kind(self):
        tab = parse_tab({"tabType": "dateSignedTabs", "documentId": "2", "pageNumber": 3})
        assert isinstance(tab, SimpleTab)
        assert group_tabs([tab]) == {
            "dateSignedTabs": [{"documentId": "2", "pageNumber": "3", "xPosition": "100", "yPosition": "150"}]
        }

    def test_unknown_tab_type(self):
        with pytest.raises(FieldValidationError, match="Tab Type"):
            parse_tab({"tabType": "hologramTabs"})


def test_group_tabs_preserves_order_per_type():
    tabs = [
        SignHereTab(document_id="1", page_number="1", position=AbsolutePosition("1", "1")),
        MergeFieldTab(placeholder="x", value="1"),
        SignHereTab(document_id="2", page_number="1", position=AbsolutePosition("2", "2")),
    ]
    grouped = group_tabs(tabs)
    assert list(grouped) == ["signHereTabs", "textTabs"]
    assert [tab["documentId"] for tab in grouped["signHereTabs"]] == ["1", "2"]
