"""Configuration keys and defaults for memoport."""

# ============================================
# Data Home Directory
# ============================================
MEMOPORT_DATA_DIR = 'MEMOPORT_DATA_DIR'

# ============================================
# Server Configuration
# ============================================
MEMOPORT_SERVER_HOST = 'MEMOPORT_SERVER_HOST'
DEFAULT_MEMOPORT_SERVER_HOST = '127.0.0.1'
MEMOPORT_SERVER_PORT = 'MEMOPORT_SERVER_PORT'
DEFAULT_MEMOPORT_SERVER_PORT = 61010

# ============================================
# Storage Backend
# ============================================
MEMOPORT_STORAGE_BACKEND = 'MEMOPORT_STORAGE_BACKEND'
DEFAULT_MEMOPORT_STORAGE_BACKEND = 'sqlite'

MEMOPORT_SQLITE_STORAGE_PATH = 'MEMOPORT_SQLITE_STORAGE_PATH'
DEFAULT_MEMOPORT_SQLITE_STORAGE_PATH = "memoport.db"

# ============================================
# Authentication
# ============================================
MEMOPORT_AUTHENTICATION_SERVICE = 'MEMOPORT_AUTHENTICATION_SERVICE'
DEFAULT_MEMOPORT_AUTHENTICATION_SERVICE = 'default'

# User that owns requests without an explicit X-User-ID header
MEMOPORT_DEFAULT_USER_ID = 'MEMOPORT_DEFAULT_USER_ID'
DEFAULT_MEMOPORT_DEFAULT_USER_ID = 1

# ============================================
# Instance Settings
# ============================================
MEMOPORT_INSTANCE_SETTINGS_SERVICE = 'MEMOPORT_INSTANCE_SETTINGS_SERVICE'
DEFAULT_MEMOPORT_INSTANCE_SETTINGS_SERVICE = 'default'

# Fallback memo content limit (UTF-8 bytes) when no instance setting is stored
MEMOPORT_CONTENT_LENGTH_LIMIT = 'MEMOPORT_CONTENT_LENGTH_LIMIT'
DEFAULT_MEMOPORT_CONTENT_LENGTH_LIMIT = 8 * 1024

# ============================================
# Memo Service
# ============================================
MEMOPORT_MEMO_SERVICE = 'MEMOPORT_MEMO_SERVICE'
DEFAULT_MEMOPORT_MEMO_SERVICE = 'default'

# ============================================
# Snapshot Builder
# ============================================
MEMOPORT_SNAPSHOT_SERVICE = 'MEMOPORT_SNAPSHOT_SERVICE'
DEFAULT_MEMOPORT_SNAPSHOT_SERVICE = 'default'

# ============================================
# Reference Importer (attachments / relations)
# ============================================
MEMOPORT_REFERENCE_IMPORTER = 'MEMOPORT_REFERENCE_IMPORTER'
DEFAULT_MEMOPORT_REFERENCE_IMPORTER = 'none'

# ============================================
# Import Reconciler
# ============================================
MEMOPORT_RECONCILER_SERVICE = 'MEMOPORT_RECONCILER_SERVICE'
DEFAULT_MEMOPORT_RECONCILER_SERVICE = 'default'

# ============================================
# Transfer Service (export / import orchestration)
# ============================================
MEMOPORT_TRANSFER_SERVICE = 'MEMOPORT_TRANSFER_SERVICE'
DEFAULT_MEMOPORT_TRANSFER_SERVICE = 'default'
