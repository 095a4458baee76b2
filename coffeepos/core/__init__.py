# Core modules

from .config import settings
from .session import TerminalSession, terminal_session

__all__ = ["settings", "TerminalSession", "terminal_session"]
