"""
Utilities module - logging helpers.
"""

from codegenie.utils.logger import CodeGenieLogger, ComponentFilter, JsonFormatter, logger

__all__ = ["CodeGenieLogger", "ComponentFilter", "JsonFormatter", "logger"]
