import sys
from typing import Any

from kink import di
from loguru import logger
from opentelemetry.trace import get_current_span

from beacon.core.config import Configuration
from beacon.core.paths import ROOT_PATH
from beacon.domain.common.utils import DataSanitizer, StringUtils


def _inject_trace_context(record: dict[str, Any]) -> None:
    """Populate ``trace_id`` / ``span_id`` in ``record['extra']`` if absent."""
    span_ctx = get_current_span().get_span_context()

    if span_ctx and span_ctx.trace_id:
        record['extra'].setdefault('trace_id', f'{span_ctx.trace_id:032x}')
        record['extra'].setdefault('span_id', f'{span_ctx.span_id:016x}')


def _sanitize_record(record: dict[str, Any]) -> None:
    record['message'] = DataSanitizer.sanitize(record['message'])
    if record['extra']:
        record['extra'] = DataSanitizer.sanitize(record['extra'])


def _patch_record(record: dict[str, Any]) -> None:
    _inject_trace_context(record)
    _sanitize_record(record)


def format_log_record(record: dict[str, Any]) -> str:
    """Human readable format; records are already sanitized by the patcher."""
    extra = record['extra']

    fmt = (
        '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | '
        '<level>{level: <8}</level> | '
        '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>'
    )

    if 'trace_id' in extra:
        fmt += ' | <blue>{extra[trace_id]}</blue>/<yellow>{extra[span_id]}</yellow>'

    if 'request_id' in extra:
        fmt += ' | <magenta>{extra[request_id]}</magenta>'

    fmt += ' | <level>{message}</level>'

    if extra:
        fmt += '\n<white>{extra}</white>'

    if record.get('exception'):
        fmt += '\n{exception}'

    return fmt + '\n'


def setup_loki_handler(config: Configuration) -> None:
    """Ship records to Loki when the optional handler package is installed."""
    try:
        from loki_logger_handler.formatters.loguru_formatter import (  # type: ignore [import-untyped] # noqa: PLC0415
            LoguruFormatter,
        )
        from loki_logger_handler.loki_logger_handler import (  # type: ignore [import-untyped] # noqa: PLC0415
            LokiLoggerHandler,
        )

    except ImportError:
        logger.warning(
            'LOG_TO_LOKI is set but loki-logger-handler is not installed; '
            'install the "loki" extra to enable it'
        )
        return

    auth = None
    if config.log.loki_username and config.log.loki_password:
        auth = (
            config.log.loki_username,
            config.log.loki_password.get_secret_value(),
        )

    loki_handler = LokiLoggerHandler(
        url=str(config.log.loki_url),
        labels={
            'service_environment': config.app_environment,
            'service_name': StringUtils.service_name(),
            'service_version': config.app_version,
        },
        auth=auth,
        timeout=10,
        compressed=True,
        default_formatter=LoguruFormatter(),
        enable_self_errors=True,
    )

    logger.add(
        loki_handler, level=config.log.level, format='{message}', serialize=True
    )


# noinspection PyTypeChecker
def setup_logging() -> None:
    """Setup Loguru logging with configuration."""
    config = di[Configuration]
    log_config = config.log

    logger.remove()
    logger.configure(patcher=_patch_record)  # type: ignore [arg-type]

    if log_config.to_stderr:
        if log_config.serialize:
            logger.add(
                sys.stderr, level=log_config.level, serialize=True, enqueue=True
            )
        else:
            logger.add(
                sys.stderr,
                level=log_config.level,
                format=format_log_record,  # type: ignore [arg-type]
                colorize=config.app_debug,
                backtrace=config.app_debug,
                diagnose=config.app_debug,
                enqueue=True,
            )

    if log_config.to_file:
        log_file_path = ROOT_PATH / log_config.file_path
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        for path, level in (
            (log_file_path, log_config.level),
            (log_file_path.with_name('error.log'), 'ERROR'),
        ):
            logger.add(
                path,
                level=level,
                format=format_log_record,  # type: ignore [arg-type]
                rotation='100 MB',
                retention='30 days',
                compression='gz',
                backtrace=True,
                diagnose=False,
                enqueue=True,
            )

    if log_config.to_loki:
        setup_loki_handler(config)


def get_logger(name: str | None = None) -> Any:
    """Get a Loguru logger instance."""
    return logger.bind(name=name) if name else logger
