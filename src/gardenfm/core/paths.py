"""Path rewrite rules, garden path resolution, and permalink sanitizing"""

from gardenfm.core.models import RewriteRule


def parse_rewrite_rules(text: str) -> list[RewriteRule]:
    """Parse `from:to` lines into rules; malformed lines are skipped."""
    rules = []
    for line in (text or "").splitlines():
        parts = [p.strip() for p in line.split(':')]
        if len(parts) == 2:
            rules.append(RewriteRule(source=parts[0], destination=parts[1]))
    return rules


def garden_path_for_note(path: str, rules: list[RewriteRule]) -> str:
    """Apply the first rule whose source prefixes path, dropping one leading '/'."""
    for rule in rules:
        if path and path.startswith(rule.source):
            new_path = path.replace(rule.source, rule.destination, 1)
            return new_path[1:] if new_path.startswith('/') else new_path
    return path


def sanitize_permalink(permalink: str) -> str:
    """Normalize an explicit permalink to the '/slug/' form."""
    if not permalink.endswith('/'):
        permalink += '/'
    if not permalink.startswith('/'):
        permalink = '/' + permalink
    return permalink
