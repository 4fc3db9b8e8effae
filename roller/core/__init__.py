"""Core types shared by every roller layer."""

from .result import Err, Ok, Result, is_err, is_ok

__all__ = ["Err", "Ok", "Result", "is_err", "is_ok"]
