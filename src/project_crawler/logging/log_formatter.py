"""
Log formatters for structured and colored crawler output.
"""

import json
import logging
from datetime import datetime
from typing import Dict, Any, Optional

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_FIELDS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'taskName',
    'exc_info', 'exc_text', 'stack_info', 'message', 'asctime'
})


class StructuredFormatter(logging.Formatter):
    """
    JSON-lines formatter.
    
    Crawl events are logged with ``extra`` fields such as ``org``,
    ``page`` and ``status``; this formatter lifts them into an ``extra``
    object so they can be filtered on downstream.
    """
    
    def __init__(self, include_extra: bool = True):
        """
        Initialize structured formatter.
        
        Args:
            include_extra: Whether to include extra fields from log records
        """
        super().__init__()
        self.include_extra = include_extra
    
    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.
        
        Args:
            record: Log record to format
            
        Returns:
            JSON-formatted log string
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }
        
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        
        if record.stack_info:
            log_entry["stack_info"] = record.stack_info
        
        if self.include_extra:
            extra_fields = extract_extra_fields(record)
            if extra_fields:
                log_entry["extra"] = extra_fields
        
        return json.dumps(log_entry, default=str, ensure_ascii=False)


def extract_extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Extract fields passed through ``extra=`` from a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_FIELDS and not key.startswith('_')
    }


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output with ANSI color codes.
    """
    
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m',
        'BOLD': '\033[1m'
    }
    
    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None):
        super().__init__(fmt, datefmt)
    
    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with colors.
        
        Args:
            record: Log record to format
            
        Returns:
            Colored log string
        """
        formatted = super().format(record)
        
        level_color = self.COLORS.get(record.levelname, '')
        reset_color = self.COLORS['RESET']
        
        if level_color:
            formatted = f"{level_color}{formatted}{reset_color}"
            
            level_name = record.levelname
            bold_level = f"{self.COLORS['BOLD']}{level_name}{reset_color}{level_color}"
            formatted = formatted.replace(level_name, bold_level, 1)
        
        return formatted
