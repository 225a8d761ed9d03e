"""Project configuration settings.

Constants shared by the key store, the cipher engine and the CLI live here.
A handful of values can be overridden from the environment.
"""

import os

# Security / crypto
KEY_LENGTH = 32  # AES-256
TOKEN_LENGTH = 16  # validation token, 128 bits
IV_LENGTH = 16   # AES block size
AUTH_TAG_LENGTH = 16  # GCM tag length
ENVELOPE_DELIMITER = ':'

# Key storage (outside the project tree)
KEY_ROOT_DIRNAME = '.env_keys'
KEY_FILENAME = 'env_key.json'
KEY_FILE_MODE = 0o600
KEY_DIR_MODE = 0o700

# Protected file
DEFAULT_TARGET = '.env'
METADATA_SUFFIX = '.encrypt'
STATUS_STABLE = 'stable'
STATUS_ROTATED = 'rotated'

# Environment overrides
HOME_ENV = 'ENVSEAL_HOME'
OPERATOR_ENV = 'ENVSEAL_OPERATOR'
LOG_LEVEL_ENV = 'ENVSEAL_LOG_LEVEL'

# Logging
LOG_LEVEL = os.environ.get(LOG_LEVEL_ENV, 'WARNING').upper()
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'

__all__ = [
	'KEY_LENGTH','TOKEN_LENGTH','IV_LENGTH','AUTH_TAG_LENGTH','ENVELOPE_DELIMITER',
	'KEY_ROOT_DIRNAME','KEY_FILENAME','KEY_FILE_MODE','KEY_DIR_MODE',
	'DEFAULT_TARGET','METADATA_SUFFIX','STATUS_STABLE','STATUS_ROTATED',
	'HOME_ENV','OPERATOR_ENV','LOG_LEVEL_ENV','LOG_LEVEL','LOG_FORMAT'
]
