"""Filename slugs for exported collections"""

import re


_NON_ALNUM = re.compile(r'[^a-z0-9]', re.IGNORECASE)


def slugify(text: str) -> str:
    """Lowercase text with every non-alphanumeric character replaced by an underscore."""
    return _NON_ALNUM.sub('_', text).lower() or 'untitled'


def export_filename(title: str, ext: str) -> str:
    """Return the download name for a collection title, e.g. 'My News!' -> 'my_news_.docx'."""
    return f"{slugify(title)}.{ext}"
