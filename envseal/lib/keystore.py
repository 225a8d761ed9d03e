"""Key store: generation, persistence and rotation of the project key.

The key file lives under the operator's home directory, namespaced by the
project directory name, so it is never committed next to the encrypted file.
"""
from __future__ import annotations
import json, secrets, logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
from config.settings import KEY_LENGTH, TOKEN_LENGTH, KEY_FILE_MODE, KEY_DIR_MODE
from .environment import Environment
from .errors import KeyNotFound, KeyCorrupt
from .files import write_atomic

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class KeyRecord:
	secret: bytes
	validation_token: str

	@classmethod
	def generate(cls) -> 'KeyRecord':
		# Independent draws: a new secret always comes with a new token
		return cls(secrets.token_bytes(KEY_LENGTH), secrets.token_hex(TOKEN_LENGTH))

	def to_dict(self) -> Dict[str, str]:
		return {'key': self.secret.hex(), 'validation_token': self.validation_token}

	@classmethod
	def from_dict(cls, raw: Any) -> 'KeyRecord':
		if not isinstance(raw, dict): raise KeyCorrupt('Key file is not a JSON object')
		key_hex = raw.get('key'); token = raw.get('validation_token')
		if not isinstance(key_hex, str) or not isinstance(token, str):
			raise KeyCorrupt('Key file missing "key" or "validation_token"')
		try:
			secret = bytes.fromhex(key_hex); token_bytes = bytes.fromhex(token)
		except ValueError:
			raise KeyCorrupt('Key file values are not valid hex')
		if len(secret) != KEY_LENGTH: raise KeyCorrupt(f'Key must be {KEY_LENGTH} bytes')
		if len(token_bytes) != TOKEN_LENGTH: raise KeyCorrupt(f'Validation token must be {TOKEN_LENGTH} bytes')
		return cls(secret, token.lower())

	def __repr__(self) -> str:
		return f"KeyRecord(secret=<redacted>, validation_token='{self.validation_token[:8]}...')"

class KeyStore:
	def __init__(self, env: Environment):
		self.env = env

	@property
	def path(self) -> Path:
		return self.env.key_path

	def exists(self) -> bool:
		return self.path.is_file()

	def load(self) -> KeyRecord:
		if not self.exists():
			raise KeyNotFound(f'Encryption key not found at {self.path}. Please ensure the key is present.')
		try:
			raw = json.loads(self.path.read_text(encoding='utf-8'))
		except (ValueError, UnicodeDecodeError) as e:
			raise KeyCorrupt(f'Key file {self.path} is unreadable: {e}')
		return KeyRecord.from_dict(raw)

	def ensure_key(self) -> KeyRecord:
		if self.exists():
			return self.load()
		record = KeyRecord.generate()
		self.save(record)
		log.info('Generated new key for project %s', self.env.project_id)
		return record

	def rotate_key(self) -> KeyRecord:
		"""Replace the stored key and token with a fresh pair.

		Every artifact bound to the previous token stops validating until it
		is re-encrypted under the new key.
		"""
		record = KeyRecord.generate()
		self.save(record)
		log.info('Rotated key for project %s (token %s...)', self.env.project_id, record.validation_token[:8])
		return record

	def save(self, record: KeyRecord) -> None:
		self.path.parent.mkdir(parents=True, exist_ok=True, mode=KEY_DIR_MODE)
		write_atomic(self.path, json.dumps(record.to_dict(), indent=4).encode('utf-8'), mode=KEY_FILE_MODE)

	def remove(self) -> None:
		self.path.unlink(missing_ok=True)
