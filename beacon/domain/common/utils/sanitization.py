import re
from collections.abc import Mapping
from typing import Any, ClassVar


class DataSanitizer:
    """
    Redacts credentials from log messages, bound extras and request headers.
    """

    SENSITIVE_PATTERNS: ClassVar[list[tuple[re.Pattern[str], str]]] = [
        # user:password@host in URLs
        (re.compile(r'(://[^:/@\s]+:)[^@\s]+(@)'), r'\1<REDACTED_PASSWORD>\2'),
        # "Authorization: Basic abc", "authorization": "Token abc"
        (
            re.compile(r'(authorization["\']?\s*[:=]\s*["\']?)[^"\'\n,}]+', re.I),
            r'\1<REDACTED_AUTH>',
        ),
        (
            re.compile(r'(bearer\s+)[a-zA-Z0-9\-._~+/=]+', re.I),
            r'\1<REDACTED_TOKEN>',
        ),
    ]

    SENSITIVE_KEYS: ClassVar[tuple[str, ...]] = (
        'authorization',
        'cookie',
        'password',
        'secret',
        'token',
        'api_key',
        'private_key',
        'credential',
    )

    REDACTION_SKIP_KEYS: ClassVar[frozenset[str]] = frozenset(
        {'token_type', 'trace_id', 'span_id', 'request_id'}
    )

    @classmethod
    def is_sensitive_key(cls, key: str) -> bool:
        lower_key = key.lower().replace('-', '_')
        if lower_key in cls.REDACTION_SKIP_KEYS:
            return False
        return any(marker in lower_key for marker in cls.SENSITIVE_KEYS)

    @classmethod
    def redact(cls, text: str) -> str:
        for pattern, replacement in cls.SENSITIVE_PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    @classmethod
    def sanitize(cls, data: Any, max_length: int = 10000) -> Any:
        """Recursively sanitize strings, mappings and sequences."""
        if isinstance(data, Mapping):
            return {
                key: (
                    '<REDACTED>'
                    if cls.is_sensitive_key(str(key))
                    and not isinstance(value, bool | Mapping | list | tuple)
                    else cls.sanitize(value, max_length)
                )
                for key, value in data.items()
            }

        if isinstance(data, list | tuple):
            return [cls.sanitize(item, max_length) for item in data]

        if isinstance(data, str):
            redacted = cls.redact(data)
            if len(redacted) > max_length:
                return redacted[:max_length] + '...<TRUNCATED>'
            return redacted

        return data

    @classmethod
    def sanitize_headers(cls, headers: Mapping[str, Any]) -> dict[str, str]:
        """Flatten headers into log-friendly keys with secrets removed."""
        return {
            key.lower().replace('-', '_'): (
                '<REDACTED>' if cls.is_sensitive_key(key) else str(value)
            )
            for key, value in headers.items()
        }
