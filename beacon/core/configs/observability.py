from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from beacon.core.paths import ROOT_PATH


class ObservabilityConfiguration(BaseSettings):
    """Metrics and tracing configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='OBSERVABILITY_',
        extra='ignore',
        frozen=True,
    )

    enabled: bool = Field(True, description='Expose Prometheus request metrics')
    metrics_path: str = Field('/metrics', description='Prometheus scrape path')

    tracing_enabled: bool = Field(False, description='Export OpenTelemetry traces')
    traces_endpoint: AnyUrl = Field(
        AnyUrl('http://tempo:4317'),
        description='OTLP gRPC endpoint used by trace exporter.',
    )
    tracing_sample_ratio: float = Field(
        1.0, ge=0.0, le=1.0, description='Tracing sample ratio (0.0 to 1.0)'
    )
    traces_to_console: bool = Field(False, description='Output traces to console')
    excluded_urls: str = Field(
        '',
        description=(
            'Comma-separated patterns of additional untraced URLs; the liveness '
            'and metrics paths are always excluded.'
        ),
    )
