#!/usr/bin/env python3
"""
Google Form Extractor - typed field structure from a public form URL
Extracts every question as date/time/dropdown/radio/text/textarea (or unknown),
plus the form action and hidden fields needed to submit it.
"""

import argparse
import asyncio
import json
import logging
import sys
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from playwright.async_api import async_playwright
from undetected_playwright import stealth_async

from .exceptions import HttpError, NoFormFound
from .field_parsers import classify
from .log_setup import configure_logging

logger = logging.getLogger(__name__)

QUESTION_ITEM_SELECTOR = '[role="listitem"]'

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36'
)


def assemble_form(document: BeautifulSoup, base_url: Optional[str] = None) -> Dict[str, Any]:
    """Build the form descriptor from a parsed Google Form page.

    Raises NoFormFound when the page has no <form>.
    """
    form_element = document.find('form')
    if form_element is None:
        raise NoFormFound(base_url)

    action = form_element.get('action') or ''
    if base_url:
        action = urljoin(base_url, action)

    fields = [classify(item) for item in document.select(QUESTION_ITEM_SELECTOR)]

    hidden_fields = [
        {'name': hidden.get('name'), 'value': hidden.get('value', '')}
        for hidden in form_element.select('input[type="hidden"]')
    ]

    return {
        'action': action,
        'fields': fields,
        'hiddenFields': hidden_fields,
    }


def summarize_fields(fields: List[Dict[str, Any]]) -> Dict[str, int]:
    """Count field descriptors per type, in first-seen order."""
    return dict(Counter(field.get('type', 'unknown') for field in fields))


class GoogleFormExtractor:
    def __init__(self, config=None):
        self.logger = logger

        self.config = config or {}
        self.render = bool(self.config.get('render', False))
        self.headless = bool(self.config.get('headless', True))
        self.user_agent = self.config.get('user_agent', DEFAULT_USER_AGENT)

        self.timeouts = {
            'request': self.config.get('request_timeout', 20000),
            'navigation': self.config.get('navigation_timeout', 20000),
            'form_wait': self.config.get('form_wait_timeout', 5000),
        }

    async def fetch_markup(self, url: str) -> str:
        """Fetch the form page with a plain GET; non-2xx raises HttpError."""
        async with async_playwright() as p:
            request_context = await p.request.new_context(user_agent=self.user_agent)
            try:
                self.logger.info(f"Fetching: {url}")
                response = await request_context.get(
                    url,
                    headers={'Content-Type': 'text/html'},
                    timeout=self.timeouts['request']
                )
                self.logger.info(f"Response status: {response.status}")
                if not response.ok:
                    raise HttpError(response.status, url)
                return await response.text()
            finally:
                await request_context.dispose()

    async def render_markup(self, url: str) -> str:
        """Load the form page in headless Chromium and return the rendered DOM."""
        async with async_playwright() as p:
            browser = await p.chromium.launch(
                headless=self.headless,
                args=[
                    '--disable-blink-features=AutomationControlled',
                    '--disable-dev-shm-usage',
                    '--no-sandbox',
                ]
            )
            try:
                context = await browser.new_context(
                    user_agent=self.user_agent,
                    extra_http_headers={'Accept-Language': 'en-US,en;q=0.9'}
                )
                page = await context.new_page()
                await stealth_async(page)

                self.logger.info(f"Navigating to: {url}")
                response = await page.goto(
                    url,
                    timeout=self.timeouts['navigation'],
                    wait_until='domcontentloaded'
                )
                if response:
                    self.logger.info(f"Navigation response status: {response.status}")
                    if response.status >= 400:
                        raise HttpError(response.status, url)

                try:
                    await page.wait_for_selector('form', timeout=self.timeouts['form_wait'])
                except Exception as e:
                    # A missing form is reported by the assembler
                    self.logger.debug(f"Form wait finished without a form: {e}")

                return await page.content()
            finally:
                try:
                    await browser.close()
                except Exception as close_error:
                    self.logger.debug(f"Error closing browser: {close_error}")

    async def extract_form_data(self, url: str) -> Dict[str, Any]:
        """Fetch a Google Form and return its action, fields and hidden fields."""
        if self.render:
            markup = await self.render_markup(url)
        else:
            markup = await self.fetch_markup(url)

        document = BeautifulSoup(markup, 'html.parser')
        form_data = assemble_form(document, base_url=url)

        self.logger.info(
            f"Extracted {len(form_data['fields'])} fields and "
            f"{len(form_data['hiddenFields'])} hidden fields"
        )
        return form_data


def save_form_data(form_data: Dict[str, Any], output_dir: str) -> Path:
    """Write the descriptor to a timestamped JSON file in output_dir."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_path = directory / f"google_form_data_{timestamp}.json"
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(form_data, f, indent=2, ensure_ascii=False)
    return output_path


def load_config(config_file: Optional[str]) -> Dict[str, Any]:
    if not config_file:
        return {}
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config = json.load(f)
        logger.info(f"Loaded configuration from {config_file}")
        return config
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load config file {config_file}: {e}")
        logger.warning("Using default configuration...")
        return {}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract the typed field structure of a Google Form"
    )
    parser.add_argument("url", help="Public Google Form URL (viewform)")
    parser.add_argument("config_file", nargs="?", help="Optional JSON configuration file")
    parser.add_argument("--output", help="Directory to save the extracted JSON into")
    parser.add_argument("--render", action="store_true", help="Render the page in headless Chromium")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


async def run(args: argparse.Namespace) -> int:
    config = load_config(args.config_file)
    if args.render:
        config['render'] = True
    if args.output:
        config['output_dir'] = args.output

    extractor = GoogleFormExtractor(config)

    try:
        form_data = await extractor.extract_form_data(args.url)
    except NoFormFound as e:
        logger.info(f"{e}")
        return 0
    except HttpError as e:
        logger.error(f"Error fetching form: {e}")
        return 1
    except Exception as e:
        logger.error(f"Error extracting form data: {e}")
        return 1

    rendered = json.dumps(form_data, indent=2, ensure_ascii=False)
    logger.debug(f"Parsed Form Structure: {rendered}")
    print(rendered)

    counts = summarize_fields(form_data['fields'])
    logger.info(f"Found {len(form_data['fields'])} fields: {counts}")
    for i, field in enumerate(form_data['fields'][:5], 1):
        options_info = f" ({len(field['options'])} options)" if field.get('options') else ""
        logger.info(f"  {i}. {field['question']} ({field['type']}){options_info}")
    if len(form_data['fields']) > 5:
        logger.info(f"  ... and {len(form_data['fields']) - 5} more fields")

    output_dir = config.get('output_dir')
    if output_dir:
        output_path = save_form_data(form_data, output_dir)
        logger.info(f"Form data saved to {output_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = build_arg_parser().parse_args(argv)
    configure_logging('form_extractor', logging.DEBUG if args.debug else logging.INFO)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
