import json
import re
from ipaddress import AddressValueError, IPv4Address, IPv6Address
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from beacon.core.paths import ROOT_PATH

_HOSTNAME_PATTERN = re.compile(r'^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$')


def split_env_list(value: str | list[str]) -> list[str]:
    """Accept ``'a,b'`` or a JSON array as well as an already parsed list."""
    if not isinstance(value, str):
        return value

    text = value.strip()
    if text.startswith('['):
        return [str(item).strip() for item in json.loads(text)]

    return [part.strip() for part in text.split(',') if part.strip()]


# noinspection PyNestedDecorators
class APIConfiguration(BaseSettings):
    """HTTP surface configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='API_',
        extra='ignore',
        frozen=True,
    )

    host: str = Field(
        default='127.0.0.1', description='API server bind address (IP or hostname)'
    )
    port: int = Field(
        default=3000, ge=1, le=65535, description='API server port number'
    )
    allowed_hosts: Annotated[list[str], NoDecode] = Field(
        default=['*'], description='Allowed host headers for API requests'
    )
    auth_enabled: bool = Field(
        default=True,
        description='Require a bearer credential on every non-public route',
    )
    public_paths: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description='Additional paths reachable without credentials',
    )

    @field_validator('host')
    @classmethod
    def validate_host(cls, value: str) -> str:
        return cls._validate_single_host(value)

    @field_validator('allowed_hosts', mode='before')
    @classmethod
    def validate_allowed_hosts(cls, value: str | list[str]) -> list[str]:
        return [
            host if host == '*' else cls._validate_single_host(host)
            for host in split_env_list(value)
        ]

    @field_validator('public_paths', mode='before')
    @classmethod
    def validate_public_paths(cls, value: str | list[str]) -> list[str]:
        paths = split_env_list(value)

        for path in paths:
            if not path.startswith('/'):
                msg = f'public path must start with "/": {path}'
                raise ValueError(msg)

        return paths

    @classmethod
    def _validate_single_host(cls, host: str) -> str:
        for address_type in (IPv4Address, IPv6Address):
            try:
                address_type(host)
                return host
            except AddressValueError:
                continue

        if not host or len(host) > 253:
            msg = f'invalid hostname length: {host}'
            raise ValueError(msg)

        invalid_labels = [
            label for label in host.split('.') if not _HOSTNAME_PATTERN.match(label)
        ]
        if invalid_labels:
            msg = f'invalid hostname "{host}": invalid labels {invalid_labels}'
            raise ValueError(msg)

        return host
