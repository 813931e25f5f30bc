"""Callable protocol for formlogic."""

from formlogic.callable.execute import execute
from formlogic.callable.result import CallableResult

__all__ = ["CallableResult", "execute"]
