"""
Question item parsers for Google Forms.

Each parser pairs a cheap test on the item markup with a parse function that
builds the field descriptor. Parsers are tried in PARSERS order and the first
passing test wins, so the specific widgets (date, time, radio, dropdown) must
come before the broad ones (text input, textarea) they may contain. Items no
parser accepts go to FALLBACK_PARSER.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from bs4 import Tag

from .metadata import extract_metadata

logger = logging.getLogger(__name__)

OTHER_OPTION_VALUE = "__other_option__"

ENTRY_INPUT_SELECTOR = 'input[type="hidden"][name*="entry"]'
OTHER_INPUT_SELECTOR = 'input[type="text"][aria-label="Other response"]'


class FieldKind(str, Enum):
    DATE = "date"
    TIME = "time"
    DROPDOWN = "dropdown"
    TEXT = "text"
    TEXTAREA = "textarea"
    RADIO = "radio"
    UNKNOWN = "unknown"


class ItemParser(NamedTuple):
    kind: FieldKind
    test: Callable[[Tag], bool]
    parse: Callable[[Tag], Dict[str, Any]]


def _has(selector: str) -> Callable[[Tag], bool]:
    return lambda element: element.select_one(selector) is not None


def _entry_field_id(element: Tag) -> Optional[str]:
    hidden_input = element.select_one(ENTRY_INPUT_SELECTOR)
    return hidden_input.get('name') if hidden_input else None


def _min_or_default(element: Tag, label: str, default: str) -> str:
    date_input = element.select_one(f'input[aria-label="{label}"]')
    if date_input is None:
        return default
    return date_input.get('min') or default


def parse_date(element: Tag) -> Dict[str, Any]:
    """Date question: month/day/year inputs with min bounds from markup."""
    return {
        **extract_metadata(element),
        'type': FieldKind.DATE.value,
        'inputType': 'date',
        'metadata': {
            'month': {'min': _min_or_default(element, 'Month', '1'), 'max': '12'},
            'day': {'min': _min_or_default(element, 'Day of the month', '1'), 'max': '31'},
            'year': {'min': _min_or_default(element, 'Year', '1900'), 'max': '2100'},
        },
    }


def parse_time(element: Tag) -> Dict[str, Any]:
    """Time question. The ranges are fixed by the widget, not read from markup."""
    return {
        **extract_metadata(element),
        'type': FieldKind.TIME.value,
        'inputType': 'time',
        'metadata': {
            'hour': {'min': '1', 'max': '12'},
            'minute': {'min': '0', 'max': '59'},
            'period': {'options': ['AM', 'PM']},
        },
    }


def parse_dropdown(element: Tag) -> Dict[str, Any]:
    """Dropdown question backed by a listbox."""
    options = [
        {
            'label': option.get_text().strip(),
            'value': option.get('data-value'),
        }
        for option in element.select('[role="option"]')
    ]
    return {
        **extract_metadata(element),
        'fieldId': _entry_field_id(element),
        'type': FieldKind.DROPDOWN.value,
        'inputType': 'select',
        'options': options,
    }


def parse_radio(element: Tag) -> Dict[str, Any]:
    """Multiple choice question, including the free-text "Other" choice."""
    options: List[Dict[str, Any]] = [
        {
            'label': option.get('aria-label'),
            'value': option.get('data-value'),
            'selected': option.get('aria-checked') == 'true',
        }
        for option in element.select('[role="radio"]')
    ]

    other_input = element.select_one(OTHER_INPUT_SELECTOR)
    if other_input is not None:
        options.append({
            'label': 'Other',
            'value': OTHER_OPTION_VALUE,
            'selected': False,
            'inputType': 'text',
            'inputFieldId': other_input.get('name'),
        })

    return {
        **extract_metadata(element),
        'fieldId': _entry_field_id(element),
        'type': FieldKind.RADIO.value,
        'inputType': 'radio',
        'options': options,
        'hasOtherOption': other_input is not None,
    }


def parse_text(element: Tag) -> Dict[str, Any]:
    text_input = element.select_one('input[type="text"]')
    return {
        **extract_metadata(element),
        'fieldId': text_input.get('name') if text_input else None,
        'type': FieldKind.TEXT.value,
        'inputType': 'text',
    }


def parse_textarea(element: Tag) -> Dict[str, Any]:
    textarea = element.select_one('textarea')
    return {
        **extract_metadata(element),
        'fieldId': textarea.get('name') if textarea else None,
        'type': FieldKind.TEXTAREA.value,
        'inputType': 'textarea',
    }


def parse_unknown(element: Tag) -> Dict[str, Any]:
    """Keep the raw markup of items no other parser recognises."""
    raw_html = str(element)
    logger.info(f"Unknown field type. Raw HTML: {raw_html}")
    return {
        **extract_metadata(element),
        'type': FieldKind.UNKNOWN.value,
        'rawHTML': raw_html,
    }


PARSERS = (
    ItemParser(FieldKind.DATE, _has('input[type="text"][aria-label="Year"]'), parse_date),
    ItemParser(FieldKind.TIME, _has('input[aria-label="Hour"]'), parse_time),
    ItemParser(FieldKind.RADIO, _has('[role="radiogroup"]'), parse_radio),
    ItemParser(FieldKind.DROPDOWN, _has('[role="listbox"]'), parse_dropdown),
    ItemParser(FieldKind.TEXT, _has('input[type="text"]'), parse_text),
    ItemParser(FieldKind.TEXTAREA, _has('textarea'), parse_textarea),
)

FALLBACK_PARSER = ItemParser(FieldKind.UNKNOWN, lambda element: True, parse_unknown)


def select_parser(element: Tag) -> ItemParser:
    """Return the first parser whose test accepts the item."""
    for parser in PARSERS:
        if parser.test(element):
            return parser
    return FALLBACK_PARSER


def classify(element: Tag) -> Dict[str, Any]:
    """Build the field descriptor for one question item."""
    parser = select_parser(element)
    logger.debug(f"Question item classified as {parser.kind.value}")
    return parser.parse(element)
