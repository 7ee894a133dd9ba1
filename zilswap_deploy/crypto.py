"""
Zilliqa keys, addresses and transaction signing
"""

import hashlib
import secrets
from typing import Optional, Tuple

from eth_keys import keys
from eth_keys.backends.native.jacobian import fast_add, fast_multiply
from eth_keys.constants import SECPK1_G, SECPK1_N
from eth_keys.exceptions import ValidationError
from eth_utils import big_endian_to_int, decode_hex, int_to_big_endian, remove_0x_prefix

from zilswap_deploy.errors import MissingPrivateKeyError

NULL_ADDRESS = "0x" + "0" * 40


def load_private_key(private_key: Optional[str]) -> keys.PrivateKey:
    """Parse a hex private key, with or without 0x prefix"""
    if not private_key:
        raise MissingPrivateKeyError("No private key was provided!")
    try:
        return keys.PrivateKey(decode_hex(private_key))
    except (ValueError, ValidationError) as e:
        raise MissingPrivateKeyError(f"Invalid private key: {e}") from e


def to_checksum_address(address: str) -> str:
    """Zilliqa checksum casing (SHA-256 based, not EIP-55)"""
    address = remove_0x_prefix(address).lower()
    v = big_endian_to_int(hashlib.sha256(bytes.fromhex(address)).digest())
    out = "0x"
    for i, char in enumerate(address):
        if char.isdigit():
            out += char
        elif v & (1 << (255 - 6 * i)):
            out += char.upper()
        else:
            out += char
    return out


def get_address_from_public_key(public_key: bytes) -> str:
    return to_checksum_address(hashlib.sha256(public_key).hexdigest()[24:])


def get_address_from_private_key(private_key: str) -> str:
    key = load_private_key(private_key)
    return get_address_from_public_key(key.public_key.to_compressed_bytes())


def _compress_point(point: Tuple[int, int]) -> bytes:
    x, y = point
    return bytes([2 + (y & 1)]) + int_to_big_endian(x).rjust(32, b"\x00")


def _challenge(commitment: bytes, public_key: bytes, message: bytes) -> int:
    return big_endian_to_int(hashlib.sha256(commitment + public_key + message).digest()) % SECPK1_N


def schnorr_sign(message: bytes, private_key: keys.PrivateKey) -> bytes:
    """Sign with Zilliqa's Schnorr scheme, returning r || s (64 bytes)"""
    public_key = private_key.public_key.to_compressed_bytes()
    d = big_endian_to_int(private_key.to_bytes())
    while True:
        k = secrets.randbelow(SECPK1_N - 1) + 1
        commitment = _compress_point(fast_multiply(SECPK1_G, k))
        r = _challenge(commitment, public_key, message)
        if r == 0:
            continue
        s = (k - r * d) % SECPK1_N
        if s == 0:
            continue
        return int_to_big_endian(r).rjust(32, b"\x00") + int_to_big_endian(s).rjust(32, b"\x00")


def schnorr_verify(message: bytes, signature: bytes, public_key: bytes) -> bool:
    if len(signature) != 64:
        return False
    r = big_endian_to_int(signature[:32])
    s = big_endian_to_int(signature[32:])
    if not (0 < r < SECPK1_N and 0 < s < SECPK1_N):
        return False
    raw = keys.PublicKey.from_compressed_bytes(public_key).to_bytes()
    point = (big_endian_to_int(raw[:32]), big_endian_to_int(raw[32:]))
    # Q = sG + rP
    q = fast_add(fast_multiply(SECPK1_G, s), fast_multiply(point, r))
    return _challenge(_compress_point(q), public_key, message) == r


def _varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _uint_field(number: int, value: int) -> bytes:
    return _varint(number << 3) + _varint(value)


def _bytes_field(number: int, value: bytes) -> bytes:
    return _varint((number << 3) | 2) + _varint(len(value)) + value


def _byte_array(value: bytes) -> bytes:
    return _bytes_field(1, value)


def encode_transaction_proto(version: int, nonce: int, to_addr: str, public_key: bytes, amount: int,
                             gas_price: int, gas_limit: int, code: str = "", data: str = "") -> bytes:
    """Serialise a ProtoTransactionCoreInfo message, the payload that gets signed"""
    message = (
        _uint_field(1, version)
        + _uint_field(2, nonce)
        + _bytes_field(3, bytes.fromhex(remove_0x_prefix(to_addr).lower()))
        + _bytes_field(4, _byte_array(public_key))
        + _bytes_field(5, _byte_array(amount.to_bytes(16, "big")))
        + _bytes_field(6, _byte_array(gas_price.to_bytes(16, "big")))
        + _uint_field(7, gas_limit)
    )
    if code:
        message += _bytes_field(8, code.encode("utf-8"))
    if data:
        message += _bytes_field(9, data.encode("utf-8"))
    return message
