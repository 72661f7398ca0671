"""Tab variants placed on documents for a signer.

Each variant carries only the fields it needs and renders itself into the
vendor's JSON shape with ``to_dict``. Tabs are grouped into the signer's
``tabs`` object by their ``tab_type`` key (``signHereTabs``, ``textTabs``, ...).
"""

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, List, Mapping, Optional, Union

from docusign_node.config.constants.docusign import (
    DEFAULT_FONT_SIZE,
    DEFAULT_RADIO_GROUP_NAME,
    DEFAULT_TAB_X,
    DEFAULT_TAB_Y,
    RADIO_Y_STEP,
)
from docusign_node.exceptions.docusign_exceptions import FieldValidationError

# Positional tabs without variant-specific fields
SIMPLE_TAB_TYPES = (
    "signHereTabs",
    "initialHereTabs",
    "dateSignedTabs",
    "fullNameTabs",
    "emailTabs",
    "companyTabs",
    "titleTabs",
    "checkboxTabs",
    "dateTabs",
    "numberTabs",
)


@dataclass(frozen=True)
class AnchorPosition:
    anchor_string: str
    x_offset: str = "0"
    y_offset: str = "0"
    units: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {
            "anchorString": self.anchor_string,
            "anchorXOffset": str(self.x_offset),
            "anchorYOffset": str(self.y_offset),
        }
        if self.units:
            data["anchorUnits"] = self.units
        return data


@dataclass(frozen=True)
class AbsolutePosition:
    x: str
    y: str

    def to_dict(self) -> Dict[str, str]:
        return {"xPosition": str(self.x), "yPosition": str(self.y)}


Position = Union[AnchorPosition, AbsolutePosition]


def resolve_position(position: Union[Position, Mapping[str, Any]]) -> Position:
    """Turn a position mapping into exactly one position mode.

    A non-empty ``anchorString`` wins over ``xPosition``/``yPosition``.
    """
    if isinstance(position, (AnchorPosition, AbsolutePosition)):
        return position

    anchor = position.get("anchorString")
    if anchor:
        return AnchorPosition(
            anchor_string=str(anchor),
            x_offset=str(position.get("anchorXOffset") or "0"),
            y_offset=str(position.get("anchorYOffset") or "0"),
            units=position.get("anchorUnits"),
        )
    return AbsolutePosition(
        x=str(position.get("xPosition") or DEFAULT_TAB_X),
        y=str(position.get("yPosition") or DEFAULT_TAB_Y),
    )


@dataclass
class Tab:
    """Positioned tab shared fields."""

    tab_type: ClassVar[str] = "signHereTabs"

    document_id: str
    page_number: str
    position: Position
    tab_label: Optional[str] = None
    required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "documentId": str(self.document_id),
            "pageNumber": str(self.page_number),
            **self.position.to_dict(),
        }
        if self.tab_label:
            data["tabLabel"] = self.tab_label
        if self.required:
            data["required"] = "true"
        return data


@dataclass
class SignHereTab(Tab):
    tab_type: ClassVar[str] = "signHereTabs"


@dataclass
class SimpleTab(Tab):
    """Any positional tab type without extra fields (initials, date signed, checkbox, ...)."""

    kind: str = "textTabs"

    @property
    def key(self) -> str:
        return self.kind


@dataclass
class TextTab(Tab):
    tab_type: ClassVar[str] = "textTabs"

    value: Optional[str] = None
    font_size: Optional[str] = None
    locked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.value is not None:
            data["value"] = self.value
        if self.font_size:
            data["fontSize"] = self.font_size
        if self.locked:
            data["locked"] = "true"
        return data


@dataclass
class MergeFieldTab:
    """Read-only text stamped over a placeholder string in the document."""

    tab_type: ClassVar[str] = "textTabs"

    placeholder: str
    value: str
    font_size: str = DEFAULT_FONT_SIZE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "anchorString": self.placeholder,
            "anchorUnits": "pixels",
            "anchorXOffset": "0",
            "anchorYOffset": "0",
            "value": self.value,
            "fontSize": self.font_size,
            "locked": "true",
            "tabLabel": f"merge_{self.placeholder}",
        }


@dataclass
class ListTab(Tab):
    tab_type: ClassVar[str] = "listTabs"

    options: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["listItems"] = build_list_items(self.options)
        return data


@dataclass
class FormulaTab(Tab):
    tab_type: ClassVar[str] = "formulaTabs"

    formula: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["formula"] = self.formula
        data["locked"] = "true"
        return data


def _position(label: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise FieldValidationError(label, "must be a number", f'{label} must be a number, got "{value}"') from None


def _format_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


@dataclass
class RadioGroupTab:
    """Mutually exclusive options stacked vertically under one group name."""

    tab_type: ClassVar[str] = "radioGroupTabs"

    document_id: str
    page_number: str
    x: str
    y: str
    values: List[str]
    group_name: str = DEFAULT_RADIO_GROUP_NAME

    def to_dict(self) -> Dict[str, Any]:
        x = _position("X Position", self.x)
        y = _position("Y Position", self.y)
        return {
            "documentId": str(self.document_id),
            "groupName": self.group_name,
            "radios": [
                {
                    "pageNumber": str(self.page_number),
                    "xPosition": _format_number(x),
                    "yPosition": _format_number(y + index * RADIO_Y_STEP),
                    "value": value,
                    "selected": "false",
                }
                for index, value in enumerate(self.values)
            ],
        }


AnyTab = Union[SignHereTab, SimpleTab, TextTab, MergeFieldTab, ListTab, FormulaTab, RadioGroupTab]


def tab_key(tab: AnyTab) -> str:
    if isinstance(tab, SimpleTab):
        return tab.key
    return tab.tab_type


def split_options(raw: Optional[str]) -> List[str]:
    """Split a comma-separated option string, trimming entries and dropping empty ones."""
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


def build_list_items(options: Iterable[str]) -> List[Dict[str, str]]:
    """Render list options; only the first one is pre-selected."""
    return [
        {
            "text": option,
            "value": re.sub(r"\s+", "_", option.lower()),
            "selected": "true" if index == 0 else "false",
        }
        for index, option in enumerate(options)
    ]


def group_tabs(tabs: Iterable[AnyTab], into: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> Dict[str, List[Dict[str, Any]]]:
    """Group rendered tabs by their tab-type key, preserving order."""
    grouped = into if into is not None else {}
    for tab in tabs:
        grouped.setdefault(tab_key(tab), []).append(tab.to_dict())
    return grouped


def parse_tab(entry: Mapping[str, Any]) -> AnyTab:
    """Build a tab variant from a host ``additionalTabs`` entry.

    The entry carries ``tabType`` plus the fields of that type; positions use
    ``xPosition``/``yPosition`` defaulting to 100/150, document ``"1"`` and page 1.
    """
    tab_type = entry.get("tabType") or "textTabs"
    document_id = str(entry.get("documentId") or "1")
    page_number = str(entry.get("pageNumber") or 1)

    if tab_type == RadioGroupTab.tab_type:
        return RadioGroupTab(
            document_id=document_id,
            page_number=page_number,
            x=str(entry.get("xPosition") or DEFAULT_TAB_X),
            y=str(entry.get("yPosition") or DEFAULT_TAB_Y),
            values=split_options(entry.get("radioItems")),
            group_name=entry.get("groupName") or DEFAULT_RADIO_GROUP_NAME,
        )

    common = {
        "document_id": document_id,
        "page_number": page_number,
        "position": resolve_position(
            {"xPosition": entry.get("xPosition"), "yPosition": entry.get("yPosition")}
        ),
        "tab_label": entry.get("tabLabel") or None,
        "required": bool(entry.get("required")),
    }

    if tab_type == ListTab.tab_type:
        return ListTab(**common, options=split_options(entry.get("listItems")))
    if tab_type == FormulaTab.tab_type:
        return FormulaTab(**common, formula=str(entry.get("formula") or ""))
    if tab_type == TextTab.tab_type:
        return TextTab(
            **common,
            value=None if entry.get("value") is None else str(entry["value"]),
            font_size=entry.get("fontSize") or None,
            locked=bool(entry.get("locked")),
        )
    if tab_type == SignHereTab.tab_type:
        return SignHereTab(**common)
    if tab_type in SIMPLE_TAB_TYPES:
        return SimpleTab(**common, kind=tab_type)

    raise FieldValidationError("Tab Type", f'"{tab_type}" is not a supported tab type')
