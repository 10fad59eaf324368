"""
Structured logging for the CodeGenie completion pipeline.

Tracks prompts, endpoint round trips and status transitions without
cluttering the pipeline code.

Logs are organized in date-stamped folders with separate files for each
log level:
  logs/YYYY-MM-DD/debug.log
  logs/YYYY-MM-DD/info.log
  logs/YYYY-MM-DD/warning.log
  logs/YYYY-MM-DD/error.log
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


class CodeGenieLogger:
    """Centralized logger for pipeline events."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.logger = logging.getLogger("codegenie")
            self.json_mode = False
            self.log_dir = None
            self._initialized = True

    def _get_default_log_dir(self) -> Path:
        """Get the default log directory path with today's date."""
        today = datetime.now().strftime("%Y-%m-%d")
        return Path("logs") / today

    def configure(
        self,
        level: str = "INFO",
        log_dir: Optional[str] = None,
        json_mode: bool = False,
        enable_logging: bool = True,
    ):
        """
        Configure logging output.

        Args:
            level: DEBUG, INFO, WARNING, ERROR (minimum level to log)
            log_dir: Optional directory for logs (default: logs/YYYY-MM-DD/)
            json_mode: Use JSON format for structured parsing
            enable_logging: Enable file logging (default: True)
        """
        if not enable_logging:
            return

        self.json_mode = json_mode
        self.logger.handlers.clear()
        self.logger.setLevel(logging.DEBUG)

        if log_dir:
            self.log_dir = Path(log_dir)
        else:
            self.log_dir = self._get_default_log_dir()

        self.log_dir.mkdir(parents=True, exist_ok=True)

        if json_mode:
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(component)-12s] %(message)s',
                datefmt='%H:%M:%S'
            )

        min_level = getattr(logging, level.upper(), logging.INFO)

        log_levels = [
            (logging.DEBUG, 'debug.log'),
            (logging.INFO, 'info.log'),
            (logging.WARNING, 'warning.log'),
            (logging.ERROR, 'error.log'),
        ]

        for log_level, filename in log_levels:
            if log_level >= min_level:
                handler = logging.FileHandler(self.log_dir / filename, mode='a', encoding='utf-8')
                handler.setLevel(log_level)
                handler.setFormatter(formatter)
                handler.addFilter(ComponentFilter())
                # One file per level, not "this level and above"
                handler.addFilter(lambda record, level=log_level: record.levelno == level)
                self.logger.addHandler(handler)

    def _log(self, level: str, component: str, msg: str, **data):
        """Core logging with structured data."""
        extra = {'component': component, **data}
        getattr(self.logger, level)(msg, extra=extra)

    # === ENDPOINT ROUND TRIPS ===

    def request_sent(self, endpoint: str, prompt: str, max_tokens: int):
        self._log('info', 'CLIENT', f"Sending prompt to {endpoint} ({len(prompt)} chars)",
                  endpoint=endpoint, max_tokens=max_tokens)
        self._log('debug', 'CLIENT', f"Prompt: {prompt!r}", endpoint=endpoint)

    def response_received(self, raw: str, sanitized: str):
        self._log('info', 'CLIENT',
                  f"Response: {len(raw)} chars raw, {len(sanitized)} chars of code",
                  raw_length=len(raw), code_length=len(sanitized))
        self._log('debug', 'CLIENT', f"Raw response: {raw!r}")

    def completion_empty(self, raw_length: int):
        self._log('warning', 'CLIENT', f"No code left after sanitizing {raw_length} chars",
                  raw_length=raw_length)

    def completion_failed(self, reason: str, detail: str):
        self._log('error', 'CLIENT', f"Completion failed [{reason}]: {detail}",
                  reason=reason, detail=detail)

    # === PIPELINE ===

    def prompt_rejected(self, flow: str, reason: str):
        self._log('info', 'ORCHESTRATOR', f"Skipped {flow}: {reason}",
                  flow=flow, reason=reason)

    def status_changed(self, enabled: bool, activity: str):
        state = "enabled" if enabled else "disabled"
        self._log('debug', 'STATUS', f"{activity} ({state})",
                  enabled=enabled, activity=activity)

    # === ERRORS & WARNINGS ===

    def error(self, component: str, message: str, exception: Optional[Exception] = None):
        import traceback

        error_details = message
        if exception:
            tb_str = ''.join(traceback.format_exception(type(exception), exception, exception.__traceback__))
            error_details = f"{message}\n{tb_str}"

        self._log('error', component.upper(), f"ERROR: {error_details}",
                  error=str(exception) if exception else message)


class ComponentFilter(logging.Filter):
    """Give records from plain module loggers a default component."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, 'component'):
            record.component = 'SYSTEM'
        return True


class JsonFormatter(logging.Formatter):
    """Minimal JSON formatter for machine parsing."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            'time': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'component': getattr(record, 'component', 'SYSTEM'),
            'message': record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k not in {'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
                         'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
                         'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
                         'thread', 'threadName', 'processName', 'process', 'message',
                         'component', 'asctime', 'taskName'}:
                data[k] = v
        return json.dumps(data, default=str)


# Global instance
logger = CodeGenieLogger()
