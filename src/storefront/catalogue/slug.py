import re

from protean.exceptions import ValidationError

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def ensure_valid_slug(slug):
    """Slugs are lowercase alphanumerics separated by single hyphens."""
    if not slug or not _SLUG_PATTERN.match(slug):
        raise ValidationError({"slug": ["Slug must contain only lowercase alphanumeric characters and single hyphens"]})
