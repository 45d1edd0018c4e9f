"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)

    @classmethod
    def is_valid(cls, level_str: str) -> bool:
        return level_str.lower() in cls._from_string


# Render loop cadence: how often pending fragments are drained and redrawn
TICK_INTERVAL = 0.1  # Seconds

# Lines moved per page-up / page-down
SCROLL_STEP = 5

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Panel titles
HISTORY_TITLE = "Chat History"
INPUT_TITLE = "Input"
