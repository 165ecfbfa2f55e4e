"""
Logging Configuration
Structured logging for cascade operations, driven by the logging.* options
"""
import json
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line

    The cascade passes operational context as extra={'context': {...}};
    anything set through extra ends up as a top-level field.
    """

    _RECORD_FIELDS = set(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message', 'asctime'}

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'channel': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        for name, value in vars(record).items():
            if name not in self._RECORD_FIELDS and name not in entry:
                entry[name] = value

        return json.dumps(entry, default=str)


class LoggerConfig:
    """Level names and handler setup for the cascade's log channel"""

    LEVELS = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'notice': logging.INFO,
        'warning': logging.WARNING,
        'error': logging.ERROR,
        'critical': logging.CRITICAL,
    }

    @classmethod
    def level_from_name(cls, level: Union[int, str]) -> int:
        """Unknown names fall back to DEBUG"""
        if isinstance(level, int):
            return level
        return cls.LEVELS.get(str(level).lower(), logging.DEBUG)

    @classmethod
    def setup_logger(
        cls,
        name: str,
        level: Union[int, str] = logging.DEBUG,
        log_file: Optional[Union[str, Path]] = None,
        format_type: str = 'json',
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> logging.Logger:
        """
        Attach a rotating file handler to a channel

        Without log_file the channel is left to propagate to whatever the
        host application configured.

        Example:
            logger = LoggerConfig.setup_logger(
                'cache_cascade',
                level='info',
                log_file='storage/logs/cache_cascade.log',
            )
        """
        from cache_cascade.defaults import DEFAULT_LOG_BACKUP_COUNT, DEFAULT_LOG_MAX_BYTES

        logger = logging.getLogger(name)
        logger.setLevel(cls.level_from_name(level))

        if log_file is None:
            return logger

        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        for handler in list(logger.handlers):
            if isinstance(handler, logging.handlers.RotatingFileHandler):
                logger.removeHandler(handler)
                handler.close()

        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes or DEFAULT_LOG_MAX_BYTES,
            backupCount=backup_count or DEFAULT_LOG_BACKUP_COUNT,
            encoding='utf-8',
        )
        if format_type == 'json':
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(handler)

        # The file is the channel's destination
        logger.propagate = False

        return logger

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> logging.Logger:
        """Logger for a logging.* options block"""
        from cache_cascade.defaults import DEFAULT_LOG_CHANNEL

        channel = options.get('channel') or DEFAULT_LOG_CHANNEL
        if not options.get('file'):
            return logging.getLogger(channel)

        from cache_cascade.support.storage import Storage
        return cls.setup_logger(
            channel,
            level=options.get('level', 'debug'),
            log_file=Storage.resolve(options['file']),
            format_type=options.get('format', 'json'),
        )
