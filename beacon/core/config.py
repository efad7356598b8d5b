from functools import lru_cache
from typing import Literal
from zoneinfo import available_timezones

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from beacon import __version__
from beacon.core.paths import ROOT_PATH

from .configs import (
    APIConfiguration,
    CableConfiguration,
    LogConfiguration,
    ObservabilityConfiguration,
)

Environment = Literal['development', 'test', 'staging', 'production']


# noinspection PyNestedDecorators,PyArgumentList
class Configuration(BaseSettings):
    """Application configuration.

    Built once at boot and read-only afterwards.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        extra='ignore',
        frozen=True,
        populate_by_name=True,
    )

    app_name: str = Field('Beacon', description='Application name')
    app_description: str = Field(
        'Backend service with a public liveness check',
        description='Application description',
    )
    app_version: str = __version__
    app_environment: Environment = Field(
        'development',
        description='Application environment',
        validation_alias='ENVIRONMENT',
    )
    app_timezone: str = Field(
        'UTC', description='Application timezone', validation_alias='TZ'
    )

    api: APIConfiguration = Field(default_factory=APIConfiguration)
    cable: CableConfiguration = Field(default_factory=CableConfiguration)
    log: LogConfiguration = Field(default_factory=LogConfiguration)
    observability: ObservabilityConfiguration = Field(
        default_factory=ObservabilityConfiguration
    )

    @property
    def app_debug(self) -> bool:
        return self.app_environment in ['development', 'test']

    @property
    def allowed_origins(self) -> list[str]:
        return self.cable.allowed_request_origins(self.app_environment)

    @field_validator('app_timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if v not in available_timezones():
            msg = f'not a valid timezone: {v}'
            raise ValueError(msg)
        return v


# noinspection PyArgumentList
@lru_cache
def get_config() -> Configuration:
    """
    Get cached application settings.
    """
    return Configuration()
