"""
Mock interview practice: pick a role, answer a fixed run of questions by
voice or text, and get a rule-based score afterwards.
"""

__version__ = "0.1.0"

from .core.roles import Role, RoleCatalog, default_catalog
from .managers.sequencer import next_question
from .managers.feedback import analyze
from .managers.session import SessionLifecycleManager

__all__ = ["Role", "RoleCatalog", "default_catalog", "next_question", "analyze", "SessionLifecycleManager"]
