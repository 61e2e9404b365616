#!/usr/bin/env python3
"""
Page renderer - the one template every generated page goes through.
"""
import html
import re

import markdown
from bs4 import BeautifulSoup

MARKDOWN_EXTENSIONS = ["extra", "toc"]

# Minimum visible characters before a page body counts as non-empty
MIN_CONTENT_LENGTH = 1


def markdown_to_html(body: str) -> str:
    return markdown.markdown(body, extensions=MARKDOWN_EXTENSIONS, output_format="html")


def extract_title(body_html: str) -> str:
    """Text of the first h1/h2 in the rendered body, or ''."""
    soup = BeautifulSoup(body_html, "html.parser")
    heading = soup.find(["h1", "h2"])
    return heading.get_text(" ", strip=True) if heading else ""


def render_page_html(path: str, frontmatter: dict, body: str) -> str:
    """
    Render one page.

    Args:
        path: The page's URL path (from its front matter)
        frontmatter: Parsed front matter of the source file
        body: Markdown body, front matter removed
    """
    body_html = markdown_to_html(body)
    title = extract_title(body_html) or str(frontmatter.get("title") or path)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>{html.escape(title)}</title>
    <link rel="canonical" href="{html.escape(path)}">
</head>
<body>
    <main class="content" id="doc_content">
        <!-- content-start -->
        {body_html}
        <!-- content-end -->
    </main>
</body>
</html>"""


def validate_page_html(html_content: str, path: str) -> tuple:
    """
    Checks a rendered page before it is written.
    Returns: (is_safe: bool, error_message: str)
    """
    if html_content.count('id="doc_content"') != 1:
        return False, f"Invalid doc_content count for {path}"

    match = re.search(r'<!-- content-start -->(.*?)<!-- content-end -->', html_content, re.DOTALL)
    if not match:
        return False, f"Missing content markers for {path}"

    text = BeautifulSoup(match.group(1), "html.parser").get_text(strip=True)
    if len(text) < MIN_CONTENT_LENGTH:
        return False, f"Empty page body for {path}"

    return True, ""
