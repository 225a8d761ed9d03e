"""Binding records: tie the protected file to the key that last encrypted it.

The record echoes the key's validation token. Before any decrypt the stored
token is compared with the current key's token; a mismatch stops the
operation before the cipher is touched.
"""
from __future__ import annotations
import hmac, json, logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from config.settings import METADATA_SUFFIX, STATUS_STABLE, STATUS_ROTATED
from .errors import BindingMismatch, BindingNotFound, BindingCorrupt, IdentityUnavailable
from .files import write_atomic
from .keystore import KeyRecord

log = logging.getLogger(__name__)

@dataclass
class BindingRecord:
	operator: str
	key_path: str
	status: str
	validation_token: str
	timestamp: Optional[str] = None

	def to_dict(self) -> Dict[str, Any]:
		return {
			'last_encrypted_by': self.operator,
			'key_path': self.key_path,
			'key_status': self.status,
			'validation_token': self.validation_token,
			'timestamp': self.timestamp,
		}

	@classmethod
	def from_dict(cls, raw: Any) -> 'BindingRecord':
		if not isinstance(raw, dict) or not isinstance(raw.get('validation_token'), str):
			raise BindingCorrupt('Binding record missing "validation_token"')
		return cls(
			operator=str(raw.get('last_encrypted_by') or 'unknown'),
			key_path=str(raw.get('key_path') or ''),
			status=str(raw.get('key_status') or STATUS_STABLE),
			validation_token=raw['validation_token'],
			timestamp=raw.get('timestamp'),
		)

def metadata_path_for(target: Path) -> Path:
	return target.with_name(target.name + METADATA_SUFFIX)

class BindingValidator:
	def __init__(self, metadata_path: Path):
		self.path = Path(metadata_path)

	@classmethod
	def for_target(cls, target: Path) -> 'BindingValidator':
		return cls(metadata_path_for(Path(target)))

	def exists(self) -> bool:
		return self.path.is_file()

	def record(self, operator_identity: str, key_path: Path | str, validation_token: str, rotated: bool = False) -> BindingRecord:
		if not operator_identity or not operator_identity.strip():
			raise IdentityUnavailable('Operator identity is empty')
		rec = BindingRecord(
			operator=operator_identity.strip(),
			key_path=str(key_path),
			status=STATUS_ROTATED if rotated else STATUS_STABLE,
			validation_token=validation_token,
			timestamp=datetime.now(timezone.utc).isoformat(timespec='seconds'),
		)
		write_atomic(self.path, json.dumps(rec.to_dict(), indent=4).encode('utf-8'))
		log.debug('Wrote binding record %s (status=%s)', self.path, rec.status)
		return rec

	def load(self) -> BindingRecord:
		if not self.exists():
			raise BindingNotFound(f'No binding record at {self.path}; cannot verify the key for this file.')
		try:
			raw = json.loads(self.path.read_text(encoding='utf-8'))
		except (ValueError, UnicodeDecodeError) as e:
			raise BindingCorrupt(f'Binding record {self.path} is unreadable: {e}')
		return BindingRecord.from_dict(raw)

	def check(self, key_record: KeyRecord, binding_record: BindingRecord) -> None:
		if hmac.compare_digest(key_record.validation_token.lower().encode(), binding_record.validation_token.lower().encode()):
			return
		when = binding_record.timestamp or 'an unknown time'
		raise BindingMismatch(
			'The encryption key is not compatible with the current encrypted file. '
			f'It was last encrypted by {binding_record.operator} at {when}; '
			'use the key that operator encrypted with.'
		)
