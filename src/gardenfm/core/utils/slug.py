"""Slug and URL path generation for published notes"""

import re


def slugify(text: str, lowercase: bool = True) -> str:
    """Convert text to a hyphen-separated URL-safe slug."""
    if lowercase:
        text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def generate_url_path(path: str, slugify_path: bool = True) -> str:
    """Turn a note path into a URL path: extension dropped, segments slugified, trailing '/'."""
    if not path:
        return path
    stem = path[:path.rfind('.')] if '.' in path else path
    if not slugify_path:
        return stem + '/'
    return '/'.join(slugify(part, lowercase=False) for part in stem.split('/')) + '/'
