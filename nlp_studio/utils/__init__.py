"""Small shared helpers."""

from .env import env_flag, env_str
from .jsonsafe import to_jsonable

__all__ = ["env_flag", "env_str", "to_jsonable"]
