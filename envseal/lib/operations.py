"""Encrypt / decrypt / rotate / status for one protected file.

Each action composes the key store, the cipher engine and the binding
validator. Library errors are turned into an Outcome here so callers only
ever inspect a result and decide how to exit.
"""
from __future__ import annotations
import logging, stat
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional
from .binding import BindingValidator
from .crypto import CipherEngine, looks_like_envelope
from .environment import Environment
from .errors import ErrorKind, SealError, TargetNotFound, AlreadyEncrypted
from .files import write_atomic
from .identity import resolve_operator
from .keystore import KeyStore, KeyRecord

log = logging.getLogger(__name__)

IdentityProvider = Callable[[], str]

@dataclass
class Outcome:
	action: str
	ok: bool
	message: str
	error: Optional[ErrorKind] = None

	@classmethod
	def success(cls, action: str, message: str) -> 'Outcome':
		return cls(action, True, message)

	@classmethod
	def failure(cls, action: str, err: SealError) -> 'Outcome':
		return cls(action, False, str(err), err.kind)

class SealedFile:
	"""The protected file plus everything needed to transform it."""

	def __init__(self, env: Environment, target: Path, identity: IdentityProvider | None = None):
		self.env = env
		target = Path(target)
		self.target = target if target.is_absolute() else env.project_dir / target
		self.keys = KeyStore(env)
		self.binding = BindingValidator.for_target(self.target)
		self.engine = CipherEngine()
		self._identity = identity or (lambda: resolve_operator(env.project_dir))

	def _read(self) -> bytes:
		if not self.target.is_file():
			raise TargetNotFound(f'{self.target} does not exist.')
		return self.target.read_bytes()

	def _write(self, data: bytes) -> None:
		write_atomic(self.target, data, mode=stat.S_IMODE(self.target.stat().st_mode))

	@staticmethod
	def _looks_sealed(raw: bytes) -> bool:
		try:
			return looks_like_envelope(raw.decode('ascii'))
		except UnicodeDecodeError:
			return False

	def is_encrypted(self) -> bool:
		return self.target.is_file() and self._sealed(self.target.read_bytes())

	def _sealed(self, raw: bytes) -> bool:
		return self.binding.exists() and self._looks_sealed(raw)

	def _rollback(self, previous: KeyRecord | None, raw: bytes | None) -> None:
		"""Put back the key (or its absence) and, when given, the original bytes."""
		log.error('Operation on %s failed; restoring previous state', self.target)
		if previous is not None:
			self.keys.save(previous)
		else:
			self.keys.remove()
		if raw is not None:
			self._write(raw)

	def encrypt(self) -> str:
		operator = self._identity()
		raw = self._read()
		if self._sealed(raw):
			raise AlreadyEncrypted(f'{self.target} is already encrypted; decrypt it first or rotate the key.')
		had_key = self.keys.exists()
		key = self.keys.ensure_key()
		written = False
		try:
			self._write(self.engine.encrypt(raw, key.secret).encode('ascii'))
			written = True
			self.binding.record(operator, self.keys.path, key.validation_token, rotated=False)
		except Exception:
			self._rollback(key if had_key else None, raw if written else None)
			raise
		log.info('Encrypted %s', self.target)
		return 'File encrypted and metadata saved.'

	def decrypt(self) -> str:
		raw = self._read()
		key = self.keys.load()
		self.binding.check(key, self.binding.load())
		plaintext = self.engine.decrypt(raw.decode('ascii', errors='replace'), key.secret)
		self._write(plaintext)
		log.info('Decrypted %s', self.target)
		return 'File decrypted.'

	def rotate(self) -> str:
		"""Re-encrypt the file under a brand-new key and token.

		The previous key and the original file bytes stay in memory until the
		new envelope and its binding record are both on disk; if either write
		fails, both are put back.
		"""
		operator = self._identity()
		raw = self._read()
		# Envelope-shaped content must pass the binding check before its key is replaced
		if self._looks_sealed(raw):
			previous = self.keys.load()
			self.binding.check(previous, self.binding.load())
			plaintext = self.engine.decrypt(raw.decode('ascii'), previous.secret)
		else:
			plaintext = raw
			previous = self.keys.load() if self.keys.exists() else None
		fresh = self.keys.rotate_key()
		written = False
		try:
			self._write(self.engine.encrypt(plaintext, fresh.secret).encode('ascii'))
			written = True
			self.binding.record(operator, self.keys.path, fresh.validation_token, rotated=True)
		except Exception:
			self._rollback(previous, raw if written else None)
			raise
		log.info('Rotated key and re-encrypted %s', self.target)
		return 'Encryption key rotated, file re-encrypted, and metadata updated.'

	def status(self) -> str:
		lines = [f'File: {self.target}', f'Key: {self.keys.path}']
		if not self.target.is_file():
			lines.append('State: missing')
			return '\n'.join(lines)
		lines.append('State: ' + ('encrypted' if self.is_encrypted() else 'unencrypted'))
		if not self.binding.exists():
			lines.append('Binding: none')
			return '\n'.join(lines)
		rec = self.binding.load()
		lines.append(f'Binding: {rec.status}, last encrypted by {rec.operator} at {rec.timestamp or "unknown"}')
		if self.keys.exists():
			try:
				self.binding.check(self.keys.load(), rec)
				lines.append('Key matches: yes')
			except SealError as e:
				lines.append(f'Key matches: no ({e.kind.value})')
		else:
			lines.append('Key matches: no key on disk')
		return '\n'.join(lines)

ACTIONS = ('encrypt', 'decrypt', 'rotate', 'status')

def run_action(action: str, env: Environment, target: Path, identity: IdentityProvider | None = None) -> Outcome:
	if action not in ACTIONS:
		raise ValueError(f'Unknown action: {action}')
	sealed = SealedFile(env, target, identity)
	try:
		return Outcome.success(action, getattr(sealed, action)())
	except SealError as e:
		log.debug('%s failed: %s', action, e.kind.value)
		return Outcome.failure(action, e)
