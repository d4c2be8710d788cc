"""
Google Form Extractor

Typed field structure extraction for public Google Forms, with an optional
Model Context Protocol (MCP) server.

Features:
- Question classification (date, time, dropdown, radio, text, textarea)
- Option lists, date/time ranges and submission field ids per question
- Lenient decoding of each question's data-params payload
- Form action and hidden fields for submission

Usage:
    pip install gforms-extractor
    gforms-extract https://docs.google.com/forms/d/e/<form-id>/viewform

Or as an MCP server:
    gforms-extractor-mcp
"""

__version__ = "1.0.0"

# Import main modules for convenience
from .data_params import parse_data_params
from .exceptions import FormExtractionError, HttpError, NoFormFound, NormalizationFailure
from .field_parsers import FieldKind, classify
from .form_extractor import GoogleFormExtractor, assemble_form
from .metadata import extract_metadata

__all__ = [
    "GoogleFormExtractor",
    "assemble_form",
    "classify",
    "extract_metadata",
    "parse_data_params",
    "FieldKind",
    "FormExtractionError",
    "HttpError",
    "NoFormFound",
    "NormalizationFailure",
]
