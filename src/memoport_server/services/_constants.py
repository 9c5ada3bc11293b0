"""
Centralized extension point constants for all memoport services.

All EXT_* constants are defined here to avoid circular import issues.
Individual service base modules re-export the relevant constants.
"""

# ============================================
# Storage
# ============================================
EXT_STORAGE_BACKEND = 'memoport-primary-storage'

# ============================================
# Authentication
# ============================================
EXT_AUTHENTICATION_SERVICE = 'memoport-authentication-service'

# ============================================
# Instance Settings
# ============================================
EXT_INSTANCE_SETTINGS_SERVICE = 'memoport-instance-settings-service'

# ============================================
# Memo
# ============================================
EXT_MEMO_SERVICE = 'memoport-memo-service'

# ============================================
# Snapshot Builder
# ============================================
EXT_SNAPSHOT_SERVICE = 'memoport-snapshot-service'

# ============================================
# Reference Importer (attachments / relations)
# ============================================
EXT_REFERENCE_IMPORTER = 'memoport-reference-importer'

# ============================================
# Import Reconciler
# ============================================
EXT_RECONCILER_SERVICE = 'memoport-reconciler-service'

# ============================================
# Transfer (export / import orchestration)
# ============================================
EXT_TRANSFER_SERVICE = 'memoport-transfer-service'
