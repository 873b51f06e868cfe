"""
Utility Functions Module for gentag

This module provides helper functions used by the command line.

Functions:
    setup_logging: Configures application logging
    format_tag_line: Formats a listed tag for display
"""

import logging

from .models import TagDetails

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def format_tag_line(tag: TagDetails, verbose: bool = False) -> str:
    """Format a tag for the list command."""
    if not verbose:
        return f"  {tag.name}"
    return f"  {tag.name} - {tag.date or 'unknown date'} - {tag.subject or 'no message'}"
