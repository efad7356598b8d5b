from pydantic import AliasChoices, AnyHttpUrl, AnyUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from beacon.core.paths import ROOT_PATH

_DEFAULT_PORTS = {'http': 80, 'https': 443}


# noinspection PyNestedDecorators
class CableConfiguration(BaseSettings):
    """Real-time transport (websocket) settings consumed at boot.

    The transport itself lives outside this service; only its mount point,
    public URL and the frontend origin used for allow-listing are held here.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='CABLE_',
        extra='ignore',
        frozen=True,
        populate_by_name=True,
    )

    mount_path: str = Field('/cable', description='Websocket mount path')
    url: AnyUrl = Field(
        AnyUrl('ws://localhost:3000/cable'),
        description='Public websocket URL advertised to clients',
        validation_alias=AliasChoices('CABLE_URL', 'ACTION_CABLE_URL'),
    )
    frontend_url: AnyHttpUrl = Field(
        AnyHttpUrl('http://localhost:5173'),
        description='Frontend origin allowed to open cross-origin connections',
        validation_alias='FRONTEND_URL',
    )

    @field_validator('mount_path')
    @classmethod
    def validate_mount_path(cls, value: str) -> str:
        if not value.startswith('/'):
            msg = f'mount path must start with "/": {value}'
            raise ValueError(msg)

        if len(value) > 1 and value.endswith('/'):
            msg = f'mount path must not end with "/": {value}'
            raise ValueError(msg)

        return value

    @field_validator('url')
    @classmethod
    def validate_websocket_scheme(cls, value: AnyUrl) -> AnyUrl:
        if value.scheme not in {'ws', 'wss'}:
            msg = f'cable url must use ws:// or wss://, got {value.scheme}://'
            raise ValueError(msg)
        return value

    @property
    def frontend_origin(self) -> str:
        url = self.frontend_url
        origin = f'{url.scheme}://{url.host}'
        if url.port and url.port != _DEFAULT_PORTS.get(url.scheme):
            origin += f':{url.port}'
        return origin

    def allowed_request_origins(self, environment: str) -> list[str]:
        """Origins allowed to reach the service from a browser.

        Production pins the frontend origin; every other environment is open.
        """
        if environment == 'production':
            return [self.frontend_origin]
        return ['*']
