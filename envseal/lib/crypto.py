"""Cipher engine: AES-256-GCM over opaque bytes, hex envelope on disk.

Envelope layout is ``hex(iv):hex(ciphertext || tag)``. A fresh iv is drawn on
every call so the same plaintext never encrypts to the same envelope twice.
"""
from __future__ import annotations
import re, secrets, logging
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend
from config.settings import KEY_LENGTH, IV_LENGTH, AUTH_TAG_LENGTH, ENVELOPE_DELIMITER
from .errors import DecryptionFailed, EncryptionFailed

log = logging.getLogger(__name__)

_ENVELOPE_RE = re.compile(
	r'^[0-9a-fA-F]{%d}%s[0-9a-fA-F]{%d,}$' % (IV_LENGTH * 2, re.escape(ENVELOPE_DELIMITER), AUTH_TAG_LENGTH * 2)
)

class CipherEngine:
	def __init__(self):
		self._backend = default_backend()

	def encrypt(self, data: bytes, secret: bytes) -> str:
		if len(secret) != KEY_LENGTH: raise EncryptionFailed('Bad key length')
		iv = secrets.token_bytes(IV_LENGTH)
		cipher = Cipher(algorithms.AES(secret), modes.GCM(iv), backend=self._backend)
		enc = cipher.encryptor()
		ct = enc.update(data) + enc.finalize()
		log.debug('Encrypted %d bytes', len(data))
		return iv.hex() + ENVELOPE_DELIMITER + (ct + enc.tag).hex()

	def decrypt(self, envelope: str, secret: bytes) -> bytes:
		"""Invert :meth:`encrypt`.

		Any malformed envelope or failed tag check raises DecryptionFailed;
		there is no attempt to salvage partial output.
		"""
		if len(secret) != KEY_LENGTH: raise DecryptionFailed('Bad key length')
		iv_hex, sep, body_hex = envelope.strip().partition(ENVELOPE_DELIMITER)
		if not sep: raise DecryptionFailed('Malformed envelope: missing delimiter')
		try:
			iv = bytes.fromhex(iv_hex); body = bytes.fromhex(body_hex)
		except ValueError:
			raise DecryptionFailed('Malformed envelope: invalid hex')
		if len(iv) != IV_LENGTH: raise DecryptionFailed('Malformed envelope: bad iv length')
		if len(body) < AUTH_TAG_LENGTH: raise DecryptionFailed('Ciphertext too short')
		ct = body[:-AUTH_TAG_LENGTH]; tag = body[-AUTH_TAG_LENGTH:]
		cipher = Cipher(algorithms.AES(secret), modes.GCM(iv, tag), backend=self._backend)
		dec = cipher.decryptor()
		try:
			return dec.update(ct) + dec.finalize()
		except InvalidTag:
			raise DecryptionFailed('Decrypt failed: wrong key or tampered data')

def looks_like_envelope(text: str) -> bool:
	return bool(_ENVELOPE_RE.match(text.strip()))
