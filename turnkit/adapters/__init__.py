"""Concrete I/O boundaries."""

from .console import ConsoleIO
from .scripted import ScriptedIO

__all__ = ["ConsoleIO", "ScriptedIO"]
