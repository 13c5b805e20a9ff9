# Arquivo - Core Module
"""
Core infrastructure for Arquivo.
Configuration, operation results and the audit log used by the file modules.
"""

from .logger import AuditLogger, AuditEntry, ActionType, ActionStatus
from .results import ErrorPolicy, FileOperationError, OperationResult
from .config import ArquivoConfig

__all__ = [
    "AuditLogger",
    "AuditEntry",
    "ActionType",
    "ActionStatus",
    "ErrorPolicy",
    "FileOperationError",
    "OperationResult",
    "ArquivoConfig",
]

__version__ = "0.1.0"
