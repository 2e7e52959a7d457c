"""
Domain models for the formula install pipeline.

    from pamformula.core.models import HostPlatform, LinkDirective, CommandResult
"""

from pamformula.core.models.command import CommandResult
from pamformula.core.models.formula import DEFAULT_SIGNING_IDENTITY, Dependency, FormulaConfig
from pamformula.core.models.link import LinkDirective
from pamformula.core.models.platform import UNDETECTED, HostPlatform, PamDirectory

__all__ = [
    "CommandResult",
    "DEFAULT_SIGNING_IDENTITY",
    "Dependency",
    "FormulaConfig",
    "HostPlatform",
    "LinkDirective",
    "PamDirectory",
    "UNDETECTED",
]
