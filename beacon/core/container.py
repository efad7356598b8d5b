from fastapi import FastAPI
from kink import di

from beacon.core.application import get_application
from beacon.core.config import Configuration, get_config


def wire_dependencies() -> None:
    _wire_core_dependencies()
    _wire_application()


# noinspection PyArgumentList
def _wire_core_dependencies() -> None:
    """Wire configuration first; everything else reads from it."""
    di[Configuration] = get_config()


def _wire_application() -> None:
    di[FastAPI] = get_application()  # type: ignore[call-arg]
