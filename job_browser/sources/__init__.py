from .arbeitnow import ArbeitnowSource
from .base import PageSource

__all__ = ["ArbeitnowSource", "PageSource"]
