"""
Review Comment Extraction

Carves per-file comments out of free-form model output. Parsing is
best-effort: headings are recognized by shape only, so any section
heading the model writes is treated as a path.
"""

import re
import logging
from typing import List

from ..models.review import ReviewComment


logger = logging.getLogger(__name__)

_HEADING = r'(?:###?|File:|File\s+path:)'

FILE_COMMENT_PATTERN = re.compile(
    r'(?:^|\n)' + _HEADING + r'\s*([^\n]+)\s*\n([\s\S]*?)(?=\n' + _HEADING + r'|\Z)',
    re.IGNORECASE
)


def extract_file_comments(response_text: str) -> List[ReviewComment]:
    """
    Extract heading-delimited comments from a review response.

    Args:
        response_text: Full text returned by the review backend

    Returns:
        Comments in document order; empty if no heading is found
    """
    comments = []

    for match in FILE_COMMENT_PATTERN.finditer(response_text):
        file_path = match.group(1).strip()
        body = match.group(2).strip()
        if file_path and body:
            comments.append(ReviewComment(path=file_path, body=body))

    logger.debug(f"Extracted {len(comments)} file comments from {len(response_text)} chars")
    return comments
