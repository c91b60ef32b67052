"""Aliyun Qianwen (DashScope) adapter."""

from .client import QianwenAdapter

__all__ = ["QianwenAdapter"]
