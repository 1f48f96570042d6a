"""
Decoder for the obfuscated MySQL login-path file (``.mylogin.cnf``).

``mysql_config_editor`` stores option-file text encrypted with AES-128 in
ECB mode. The key is not secret: it is kept in the file itself as a 20-byte
blob that gets folded into a 16-byte AES key. Layout::

    [0, 4)    unused
    [4, 24)   key blob
    [24, ..)  frames: <uint32 little-endian length><length bytes ciphertext>

Each frame holds one encrypted line, padded on its own with PKCS#7.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator, Union

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import CryptoError, EncodingError, FormatError

# Unused buffer at the beginning of the login path file.
UNUSED_BUFFER_LENGTH = 4
# The length of the key stored in the file.
LOGIN_KEY_LENGTH = 20
# Number of bytes used to store the length of a ciphertext frame.
CIPHER_STORE_LENGTH = 4
AES_BLOCK_SIZE = 16
HEADER_LENGTH = UNUSED_BUFFER_LENGTH + LOGIN_KEY_LENGTH

_FRAME_LENGTH = struct.Struct("<I")

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class LoginFileHeader:
    unused: bytes
    key_blob: bytes

    def __post_init__(self) -> None:
        if len(self.unused) != UNUSED_BUFFER_LENGTH:
            raise FormatError(f"Header padding must be {UNUSED_BUFFER_LENGTH} bytes")
        if len(self.key_blob) != LOGIN_KEY_LENGTH:
            raise FormatError(f"Login key must be {LOGIN_KEY_LENGTH} bytes")

    @classmethod
    def parse(cls, raw: BytesLike) -> "LoginFileHeader":
        if len(raw) < HEADER_LENGTH:
            raise FormatError("Login file truncated header")
        view = memoryview(raw)
        return cls(
            unused=bytes(view[:UNUSED_BUFFER_LENGTH]),
            key_blob=bytes(view[UNUSED_BUFFER_LENGTH:HEADER_LENGTH]),
        )

    @property
    def key(self) -> bytes:
        return fold_key(self.key_blob)


def fold_key(blob: BytesLike) -> bytes:
    """XOR the 20-byte stored key into a 16-byte AES key (byte i lands on i % 16)."""
    if len(blob) != LOGIN_KEY_LENGTH:
        raise ValueError(f"Login key must be {LOGIN_KEY_LENGTH} bytes, got {len(blob)}")
    key = bytearray(AES_BLOCK_SIZE)
    for index in range(LOGIN_KEY_LENGTH):
        key[index % AES_BLOCK_SIZE] ^= blob[index]
    return bytes(key)


def iter_frames(data: BytesLike, offset: int = HEADER_LENGTH) -> Iterator[bytes]:
    """
    Yield the ciphertext of each length-prefixed frame, starting at ``offset``.

    Iteration stops once ``CIPHER_STORE_LENGTH`` bytes or fewer remain; those
    trailing bytes are ignored. A length prefix pointing past the end of the
    buffer raises ``FormatError``.
    """
    view = memoryview(data)
    total_len = len(view)
    cursor = offset
    while total_len - cursor > CIPHER_STORE_LENGTH:
        length = _FRAME_LENGTH.unpack_from(view, cursor)[0]
        cursor += CIPHER_STORE_LENGTH
        if length > total_len - cursor:
            raise FormatError(
                f"Malformed login file (frame at offset {cursor - CIPHER_STORE_LENGTH} "
                f"claims {length} bytes, {total_len - cursor} remain)"
            )
        yield bytes(view[cursor:cursor + length])
        cursor += length


def decrypt_frame(key: bytes, frame: bytes) -> bytes:
    """Decrypt one AES-128-ECB frame and strip its PKCS#7 padding."""
    try:
        decryptor = Cipher(algorithms.AES(key), modes.ECB()).decryptor()
        padded = decryptor.update(frame) + decryptor.finalize()
        unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise CryptoError(f"Failed to decrypt login file frame: {exc}") from exc


def decode_login_bytes(raw: BytesLike) -> bytes:
    """Decrypt a whole login file buffer and return the plaintext bytes."""
    header = LoginFileHeader.parse(raw)
    key = header.key
    plaintext = bytearray()
    for frame in iter_frames(raw, HEADER_LENGTH):
        plaintext += decrypt_frame(key, frame)
    return bytes(plaintext)


def decode_login_text(raw: BytesLike) -> str:
    plain = decode_login_bytes(raw)
    try:
        return plain.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Decrypted login file is not valid UTF-8: {exc}") from exc


__all__ = [
    "AES_BLOCK_SIZE",
    "CIPHER_STORE_LENGTH",
    "HEADER_LENGTH",
    "LOGIN_KEY_LENGTH",
    "LoginFileHeader",
    "UNUSED_BUFFER_LENGTH",
    "decode_login_bytes",
    "decode_login_text",
    "decrypt_frame",
    "fold_key",
    "iter_frames",
]
