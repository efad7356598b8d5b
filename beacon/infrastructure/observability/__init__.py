from .bootstrap import configure_observability

__all__ = ['configure_observability']
