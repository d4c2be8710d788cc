"""
Common metadata shared by every question item of a Google Form.
"""

from typing import Any, Dict

from bs4 import Tag

from .data_params import parse_data_params

UNNAMED_QUESTION = "Unnamed"


def extract_metadata(element: Tag) -> Dict[str, Any]:
    """Parse the question label and data-params of a question item."""
    heading = element.select_one('[role="heading"]')
    question = heading.get_text().strip() if heading else UNNAMED_QUESTION

    params_holder = element.select_one('[data-params]')
    raw_data_params = params_holder.get('data-params') if params_holder else None

    parsed_data_params = None
    if raw_data_params:
        parsed_data_params = parse_data_params(raw_data_params)

    return {
        'question': question,
        'rawDataParams': raw_data_params,
        'parsedDataParams': parsed_data_params,
    }
