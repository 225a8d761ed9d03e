"""Error kinds shared by the key store, cipher engine and binding checks."""
from __future__ import annotations
from enum import Enum

class ErrorKind(str, Enum):
	KEY_NOT_FOUND = 'key_not_found'
	KEY_CORRUPT = 'key_corrupt'
	FILE_NOT_FOUND = 'file_not_found'
	DECRYPTION_FAILED = 'decryption_failed'
	BINDING_MISMATCH = 'binding_mismatch'
	BINDING_NOT_FOUND = 'binding_not_found'
	BINDING_CORRUPT = 'binding_corrupt'
	IDENTITY_UNAVAILABLE = 'identity_unavailable'
	ALREADY_ENCRYPTED = 'already_encrypted'
	ENCRYPTION_FAILED = 'encryption_failed'

class SealError(Exception):
	kind: ErrorKind

class KeyNotFound(SealError):
	kind = ErrorKind.KEY_NOT_FOUND

class KeyCorrupt(SealError):
	kind = ErrorKind.KEY_CORRUPT

class TargetNotFound(SealError):
	kind = ErrorKind.FILE_NOT_FOUND

class EncryptionFailed(SealError):
	kind = ErrorKind.ENCRYPTION_FAILED

class DecryptionFailed(SealError):
	kind = ErrorKind.DECRYPTION_FAILED

class BindingMismatch(SealError):
	kind = ErrorKind.BINDING_MISMATCH

class BindingNotFound(SealError):
	kind = ErrorKind.BINDING_NOT_FOUND

class BindingCorrupt(SealError):
	kind = ErrorKind.BINDING_CORRUPT

class IdentityUnavailable(SealError):
	kind = ErrorKind.IDENTITY_UNAVAILABLE

class AlreadyEncrypted(SealError):
	kind = ErrorKind.ALREADY_ENCRYPTED
