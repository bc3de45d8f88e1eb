"""Constants for the forensic log analyzer to eliminate string literal duplication."""

# Action Types
ACTION_LOGIN = "LOGIN"
ACTION_LOGOUT = "LOGOUT"
ACTION_FILE_ACCESS = "FILE_ACCESS"
ACTION_COMMAND_EXEC = "COMMAND_EXEC"
ACTION_DATA_TRANSFER = "DATA_TRANSFER"

# CSV Layout
CSV_SEPARATOR = ","
CSV_COLUMNS = [
    "TIMESTAMP",
    "USER_ID",
    "SESSION_ID",
    "ACTION_TYPE",
    "TARGET_RESOURCE",
    "SEVERITY_LEVEL",
    "BYTES_TRANSFERRED",
]
CSV_FIELD_COUNT = len(CSV_COLUMNS)

# Suspicious Timeline Defaults
DEFAULT_CONSECUTIVE_FILE_ACCESS = 5
DEFAULT_LONG_SESSION_ACTIONS = 100
DEFAULT_FAST_MEAN_GAP_SECONDS = 1.0
DEFAULT_FAST_MIN_ACTIONS = 10

# Analysis Defaults
DEFAULT_TOP_K = 5

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOGGER_NAMESPACE = "forensics"
LOG_FILE_LIFESPAN_SECONDS = 2 * 24 * 60 * 60  # 2 days

# Environment Variables
ENV_CONFIG_PATH = "FORENSICS_CONFIG"
ENV_LOG_LEVEL = "FORENSICS_LOG_LEVEL"
ENV_STRICT = "FORENSICS_STRICT"
ENV_LOG_DIR = "FORENSICS_LOG_DIR"

# Configuration
CONFIG_PATH = "config"
DEFAULT_CONFIG_FILE = "forensics.yaml"

# Error Messages
FILE_NOT_FOUND_ERROR = "Log file not found or inaccessible"
FIELD_COUNT_ERROR = "insufficient number of fields"
NEGATIVE_BYTES_ERROR = "bytes transferred must be non-negative"

ENCODING_UTF8 = "utf-8"
