"""
Markup builders shaped like the server-rendered Google Forms viewform page.
"""

from typing import List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

FORM_ACTION = "https://docs.google.com/forms/u/0/d/e/1FAIpQLSe-test/formResponse"
VIEWFORM_URL = "https://docs.google.com/forms/d/e/1FAIpQLSe-test/viewform"

DEFAULT_HIDDEN = (("fvv", "1"), ("pageHistory", "0"), ("fbzx", "-4213079117713557463"))


def data_params(question_id: int, title: str, entry_id: int) -> str:
    """A realistic, already entity-encoded data-params attribute value."""
    return (
        f"%.@.[{question_id},&quot;{title}&quot;,null,0,"
        f"[[{entry_id},null,1,null,[]]],null,null,null,null,null,[]],"
        f"&quot;i1&quot;,&quot;i2&quot;,&quot;i3&quot;,false]"
    )


def question_item(body: str, heading: Optional[str] = None, params: Optional[str] = None) -> str:
    heading_html = f'<div role="heading" aria-level="3">{heading}</div>' if heading is not None else ""
    params_attr = f' data-params="{params}"' if params is not None else ""
    return (
        f'<div role="listitem"><div jsmodel="CP1oW"{params_attr}>'
        f'{heading_html}{body}</div></div>'
    )


def text_item(heading: str = "Your name", entry: str = "entry.1001") -> str:
    return question_item(
        f'<input type="text" class="whsOnd" name="{entry}" value="">',
        heading=heading,
        params=data_params(111, heading, 1001),
    )


def textarea_item(heading: str = "Comments", entry: str = "entry.1002") -> str:
    return question_item(
        f'<textarea class="KHxj8b" name="{entry}"></textarea>',
        heading=heading,
        params=data_params(112, heading, 1002),
    )


def date_item(heading: str = "Birthday", year_min: Optional[str] = None) -> str:
    year_min_attr = f' min="{year_min}"' if year_min else ""
    return question_item(
        '<input type="date" aria-label="Month">'
        '<input type="date" aria-label="Day of the month">'
        f'<input type="text" aria-label="Year"{year_min_attr}>'
        '<input type="hidden" name="entry.1003_year">',
        heading=heading,
    )


def time_item(heading: str = "Arrival") -> str:
    return question_item(
        '<input type="text" aria-label="Hour" maxlength="2">'
        '<input type="text" aria-label="Minute" maxlength="2">'
        '<div role="listbox"><div role="option" data-value="AM">AM</div>'
        '<div role="option" data-value="PM">PM</div></div>',
        heading=heading,
    )


def dropdown_item(heading: str = "Size", options: Sequence[str] = ("Small", "Large"),
                  entry: str = "entry.1004") -> str:
    option_html = "".join(
        f'<div role="option" data-value="{option}"><span> {option} </span></div>' for option in options
    )
    return question_item(
        f'<div role="listbox"><div role="option" data-value="">Choose</div>{option_html}</div>'
        f'<input type="hidden" name="{entry}" value="">',
        heading=heading,
    )


def radio_item(heading: str = "Favourite color",
               options: Sequence[Tuple[str, bool]] = (("Red", True), ("Green", False)),
               other_entry: Optional[str] = "entry.1005.other_option_response",
               entry: str = "entry.1005") -> str:
    radios = "".join(
        f'<div role="radio" aria-label="{label}" data-value="{label}" '
        f'aria-checked="{"true" if checked else "false"}"></div>'
        for label, checked in options
    )
    other = f'<input type="text" aria-label="Other response" name="{other_entry}">' if other_entry else ""
    return question_item(
        f'<div role="radiogroup">{radios}{other}</div>'
        f'<input type="hidden" name="{entry}" value="">',
        heading=heading,
    )


def unknown_item(heading: str = "Rate us") -> str:
    return question_item('<div class="star-widget" data-stars="5"></div>', heading=heading)


def form_page(items: List[str], hidden: Sequence[Tuple[str, str]] = DEFAULT_HIDDEN,
              action: str = FORM_ACTION) -> str:
    hidden_html = "".join(f'<input type="hidden" name="{name}" value="{value}">' for name, value in hidden)
    return (
        "<html><head><title>Test form</title></head><body>"
        f'<form action="{action}" method="POST"><div role="list">{"".join(items)}</div>'
        f"{hidden_html}</form></body></html>"
    )


def parse_item(markup: str) -> Tag:
    return BeautifulSoup(markup, "html.parser").select_one('[role="listitem"]')
