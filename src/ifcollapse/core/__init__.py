"""
ifcollapse.core: host-independent utilities and infrastructure.

Modules:
    config      - LintConfiguration, ProjectConfiguration, RuleConfiguration
    logging     - IfCollapseLogger with MDC support, configure_loggers
    registry    - Registrant metaclass, EventEmitter
    stats       - LintStatistics tracking
    typing      - Cross-version typing compatibility imports
"""

# Configuration
from .config import (
    LintConfiguration,
    ProjectConfiguration,
    RuleConfiguration,
    ConfigConstants,
    DEFAULT_USER_DIR,
)

# Logging
from .logging import (
    IfCollapseLogger,
    getLogger,
    configure_loggers,
    clear_logs,
    LoggerConfigurator,
    LevelFlag,
)

# Registry
from .registry import (
    Registrant,
    Registry,
    EventEmitter,
    FilterableGenerator,
)

# Statistics
from .stats import LintStatistics, LintEvent

# Re-export typing module contents for convenience
from . import typing


__all__ = [
    # config
    "LintConfiguration",
    "ProjectConfiguration",
    "RuleConfiguration",
    "ConfigConstants",
    "DEFAULT_USER_DIR",
    # logging
    "IfCollapseLogger",
    "getLogger",
    "configure_loggers",
    "clear_logs",
    "LoggerConfigurator",
    "LevelFlag",
    # registry
    "Registrant",
    "Registry",
    "EventEmitter",
    "FilterableGenerator",
    # stats
    "LintStatistics",
    "LintEvent",
    # typing module
    "typing",
]
