"""String Utilities Module"""

import re
import unicodedata

from kink import di

from beacon.core.config import Configuration


class StringUtils:
    """Collection of static string utility methods."""

    _NON_ALNUM_RE = re.compile(r'[^a-zA-Z0-9]+')

    @staticmethod
    def strip_accents(text: str) -> str:
        """Remove diacritical marks (accents) from characters in *text*."""
        normalized = unicodedata.normalize('NFD', text)
        return ''.join(ch for ch in normalized if unicodedata.category(ch) != 'Mn')

    @staticmethod
    def slugify(text: str, max_length: int | None = 80) -> str:
        """Generate URL slug from *text* limited to *max_length*."""
        text = StringUtils.strip_accents(text.lower())
        text = StringUtils._NON_ALNUM_RE.sub('-', text).strip('-')
        if max_length:
            text = text[:max_length].rstrip('-')
        return text

    @staticmethod
    def service_name() -> str:
        """Slug of the configured application name, used as a telemetry label."""
        return StringUtils.slugify(di[Configuration].app_name)
