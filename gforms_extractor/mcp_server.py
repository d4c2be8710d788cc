#!/usr/bin/env python3
"""
MCP Server for Google Form extraction
Provides two tools:
1. google_form_extraction - Extract typed field structure from form URLs
2. health_check - Report server status

This server implements the Model Context Protocol (MCP) specification
so MCP clients can read a form's questions before answering them.
"""

import asyncio
import logging
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .exceptions import HttpError, NoFormFound
from .form_extractor import GoogleFormExtractor, summarize_fields
from .log_setup import configure_logging

logger = logging.getLogger(__name__)

SERVER_NAME = "google-form-extractor"
SERVER_VERSION = "1.0.0"
MAX_URLS = 5

# Initialize FastMCP server
mcp = FastMCP(SERVER_NAME)


def _normalize_urls(url: Optional[str], urls: Optional[List[str]]) -> List[str]:
    if urls and isinstance(urls, list):
        url_list = urls
    elif url and isinstance(url, str):
        url_list = [url]
    else:
        raise ValueError("Provide 'url' (string) or 'urls' (list of up to 5 URLs)")

    if len(url_list) > MAX_URLS:
        raise ValueError(f"Maximum of {MAX_URLS} URLs allowed per call")

    for u in url_list:
        if not u or not isinstance(u, str) or not u.startswith(('http://', 'https://')):
            raise ValueError(f"Invalid URL provided: {u}. URL must start with http:// or https://")
    return url_list


async def _extract_one(target_url: str, sem: asyncio.Semaphore, config: Dict[str, Any]) -> Dict[str, Any]:
    async with sem:
        try:
            logger.info(f"Extracting form for URL: {target_url}")
            extractor = GoogleFormExtractor(config)
            form_data = await extractor.extract_form_data(target_url)
            total_fields = len(form_data['fields'])
            logger.info(f"Form extraction complete for {target_url}. Fields: {total_fields}")
            return {
                "status": "success",
                "message": f"Successfully extracted {total_fields} form fields",
                "url": target_url,
                "total_fields": total_fields,
                "field_types": summarize_fields(form_data['fields']),
                "form": form_data,
                "timestamp": datetime.now().isoformat()
            }
        except NoFormFound as e:
            logger.info(f"{e}")
            return {
                "status": "error",
                "error_type": "no_form",
                "message": f"No form element found at {target_url}",
                "url": target_url,
                "error_details": str(e)
            }
        except HttpError as e:
            logger.error(f"Form extraction failed for {target_url}: {e}")
            return {
                "status": "error",
                "error_type": "http",
                "http_status": e.status,
                "message": f"Form extraction failed for {target_url}: {e}",
                "url": target_url,
                "error_details": str(e)
            }
        except Exception as e:
            error_msg = f"Form extraction failed for {target_url}: {str(e)}"
            logger.error(error_msg)
            return {
                "status": "error",
                "message": error_msg,
                "url": target_url,
                "error_details": str(e)
            }


@mcp.tool()
async def google_form_extraction(url: Optional[str] = None, urls: Optional[List[str]] = None,
                                 render: bool = False) -> Dict[str, Any]:
    """
    Extract the typed field structure of one or more Google Form URLs.

    Args:
        url: A single form URL starting with http:// or https://
        urls: A list of form URLs (max 5) to extract in parallel
        render: Load the page in headless Chromium instead of a plain GET

    Returns:
        A dictionary containing a summary and an array of per-URL results.

    Per-URL result object:
        {
          "status": "success",
          "message": "Successfully extracted 4 form fields",
          "url": "https://docs.google.com/forms/d/e/.../viewform",
          "total_fields": 4,
          "field_types": {"text": 2, "radio": 1, "date": 1},
          "form": {"action": "...", "fields": [...], "hiddenFields": [...]},
          "timestamp": "2025-08-13T10:15:30.123456"
        }
    """
    try:
        url_list = _normalize_urls(url, urls)
        logger.info(f"Starting form extraction for {len(url_list)} URL(s)")

        sem = asyncio.Semaphore(min(MAX_URLS, len(url_list)))
        config = {'render': render}
        results = await asyncio.gather(*[_extract_one(u, sem, config) for u in url_list])

        success_count = sum(1 for r in results if r.get("status") == "success")
        error_count = len(results) - success_count
        overall_status = "success" if error_count == 0 else ("partial" if success_count > 0 else "error")

        return {
            "status": overall_status,
            "total_urls": len(url_list),
            "succeeded": success_count,
            "failed": error_count,
            "results": list(results)
        }

    except ValueError as e:
        error_msg = f"Form extraction failed: {str(e)}"
        logger.error(error_msg)
        return {
            "status": "error",
            "message": error_msg,
            "error_details": str(e),
            "results": []
        }


@mcp.tool()
async def health_check() -> Dict[str, Any]:
    """
    Check the health status of the form extraction server.

    Returns:
        A dictionary containing the server status
    """
    return {
        "status": "healthy",
        "server": SERVER_NAME,
        "version": SERVER_VERSION,
        "timestamp": datetime.now().isoformat(),
        "tools_available": [
            "google_form_extraction",
            "health_check"
        ]
    }


@mcp.resource("server://info")
def get_server_info() -> str:
    """Get information about the form extraction server."""
    return f"""# Google Form Extractor

## Available Tools:

### 1. google_form_extraction
Extracts the question structure of one or more Google Forms.
- Input: `url` (single URL) or `urls` (list, up to {MAX_URLS}); optional `render`
- Output: Per-URL results with the form action, typed fields and hidden fields

Field types: date, time, dropdown, radio, text, textarea, unknown.
Radio questions with a free-text choice carry a synthetic "Other" option
with value `__other_option__`.

### 2. health_check
Checks the server health.

## Server Status:
- Version: {SERVER_VERSION}
- Timestamp: {datetime.now().isoformat()}
"""


def main():
    """Main entry point for the MCP server."""
    configure_logging('mcp_server')
    logger.info(f"Starting Google Form Extractor MCP Server v{SERVER_VERSION}...")
    logger.info("Available tools: google_form_extraction, health_check")

    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
