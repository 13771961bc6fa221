import logging

import pytest
from rosterguard.core.hashing import hash_value
from rosterguard.protection.cipher import (
    DecryptionError,
    EncryptionError,
    PIICipher,
    derive_key,
    generate_key,
)

TEST_KEY = "unit-test-secret"
PLAINTEXTS = ["234123412346", "9876543210", "a", "नमस्ते ✓", "x" * 500]


@pytest.fixture
def cipher():
    return PIICipher(TEST_KEY)


def _flip_hex(ch: str) -> str:
    return "1" if ch == "0" else "0"


def test_derive_key_pads_and_truncates():
    assert derive_key("abc") == b"abc" + b"0" * 29
    assert derive_key("k" * 40) == b"k" * 32
    assert derive_key("default-key-change-this-12345") == b"default-key-change-this-12345000"
    assert derive_key("abc", pad_char="#") == b"abc" + b"#" * 29

def test_derive_key_rejects_multibyte_secret():
    with pytest.raises(EncryptionError):
        derive_key("ключ")

@pytest.mark.parametrize("plaintext", PLAINTEXTS)
def test_round_trip(cipher, plaintext):
    assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

def test_envelope_format(cipher):
    blob = cipher.encrypt("234123412346")
    iv, ciphertext, tag = blob.split(":")
    assert len(iv) == 32
    assert len(tag) == 32
    assert len(ciphertext) == 2 * len("234123412346")
    assert blob == blob.lower()
    bytes.fromhex(iv + ciphertext + tag)

def test_encryption_is_randomized(cipher):
    first = cipher.encrypt("234123412346")
    second = cipher.encrypt("234123412346")
    assert first != second
    assert first.split(":")[0] != second.split(":")[0]

def test_empty_input_passthrough(cipher):
    assert cipher.encrypt("") == ""
    assert cipher.encrypt(None) == ""
    assert cipher.decrypt("") == ""

def test_tampered_ciphertext_fails(cipher):
    blob = cipher.encrypt("234123412346")
    iv, ciphertext, tag = blob.split(":")
    for pos in range(len(ciphertext)):
        altered = ciphertext[:pos] + _flip_hex(ciphertext[pos]) + ciphertext[pos + 1:]
        with pytest.raises(DecryptionError):
            cipher.decrypt(f"{iv}:{altered}:{tag}")

def test_tampered_tag_fails(cipher):
    blob = cipher.encrypt("234123412346")
    iv, ciphertext, tag = blob.split(":")
    for pos in range(len(tag)):
        altered = tag[:pos] + _flip_hex(tag[pos]) + tag[pos + 1:]
        with pytest.raises(DecryptionError):
            cipher.decrypt(f"{iv}:{ciphertext}:{altered}")

def test_tampered_iv_fails(cipher):
    blob = cipher.encrypt("234123412346")
    iv, ciphertext, tag = blob.split(":")
    with pytest.raises(DecryptionError):
        cipher.decrypt(f"{_flip_hex(iv[0])}{iv[1:]}:{ciphertext}:{tag}")

def test_wrong_key_fails(cipher):
    blob = cipher.encrypt("234123412346")
    with pytest.raises(DecryptionError):
        PIICipher("another-secret").decrypt(blob)

@pytest.mark.parametrize("blob", [
    "deadbeef",
    "aa:bb",
    "aa:bb:cc:dd",
    "zz" * 16 + ":00:" + "00" * 16,
    "00" * 12 + ":00:" + "00" * 16,
    "00" * 16 + ":00:" + "00" * 8,
])
def test_malformed_envelope_fails(cipher, blob):
    with pytest.raises(DecryptionError) as excinfo:
        cipher.decrypt(blob)
    assert str(excinfo.value) == "Failed to decrypt data"

def test_decryption_failure_is_logged_without_the_blob(cipher, caplog):
    blob = cipher.encrypt("234123412346")
    iv, ciphertext, tag = blob.split(":")
    bad = f"{iv}:{ciphertext}:{_flip_hex(tag[0])}{tag[1:]}"
    with caplog.at_level(logging.WARNING, logger="rosterguard.protection.cipher"):
        with pytest.raises(DecryptionError):
            cipher.decrypt(bad)
    assert "Decryption failed" in caplog.text
    assert ciphertext not in caplog.text
    assert "234123412346" not in caplog.text

def test_compatible_with_existing_key_derivation():
    # Same secret -> same key, so records written by one instance decrypt in another
    blob = PIICipher(TEST_KEY).encrypt("9876543210")
    assert PIICipher(TEST_KEY).decrypt(blob) == "9876543210"

def test_lookup_hash_is_deterministic(cipher):
    assert cipher.lookup_hash("234123412346") == cipher.lookup_hash("234123412346")
    assert len(cipher.lookup_hash("234123412346")) == 64
    assert cipher.lookup_hash("234123412346") != cipher.lookup_hash("234123412347")
    assert cipher.lookup_hash("") == ""

def test_lookup_hash_depends_on_key(cipher):
    other = PIICipher("another-secret")
    assert cipher.lookup_hash("234123412346") != other.lookup_hash("234123412346")
    assert cipher.lookup_hash("234123412346") != hash_value("234123412346")

def test_protect(cipher):
    protected = cipher.protect("234123412346")
    assert protected.masked == "********2346"
    assert protected.lookup_hash == cipher.lookup_hash("234123412346")
    assert cipher.decrypt(protected.encrypted) == "234123412346"
    assert set(protected.to_dict()) == {"encrypted", "masked", "lookup_hash"}

def test_protect_empty_value(cipher):
    protected = cipher.protect("")
    assert protected.to_dict() == {"encrypted": "", "masked": "", "lookup_hash": ""}

def test_repr_hides_key(cipher):
    assert TEST_KEY not in repr(cipher)

def test_generate_key():
    key = generate_key()
    assert len(key) == 32
    int(key, 16)
    assert key != generate_key()
    assert len(derive_key(key)) == 32

def test_hash_value():
    assert hash_value("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert len(hash_value("234123412346")) == 64

def test_unencodable_plaintext_raises_encryption_error(cipher):
    lone_surrogate = "2341\ud800"
    with pytest.raises(EncryptionError):
        cipher.encrypt(lone_surrogate)
    with pytest.raises(EncryptionError):
        cipher.lookup_hash(lone_surrogate)
    with pytest.raises(EncryptionError):
        cipher.protect(lone_surrogate)
