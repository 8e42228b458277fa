import pytest

from interaction_router.errors import ConfigurationError
from interaction_router.verifier import SignatureVerifier

BODY = b'{"type":1}'


def test_valid_signature(verifier, sign) -> None:
    headers = sign(BODY)
    assert verifier.verify(BODY, headers['X-Signature-Timestamp'], headers['X-Signature-Ed25519'])


def test_any_body_byte_change_fails(verifier, sign) -> None:
    headers = sign(BODY)
    for index in range(len(BODY)):
        tampered = bytearray(BODY)
        tampered[index] ^= 0x01
        assert not verifier.verify(
            bytes(tampered), headers['X-Signature-Timestamp'], headers['X-Signature-Ed25519']
        )


def test_any_timestamp_change_fails(verifier, sign) -> None:
    headers = sign(BODY)
    timestamp = headers['X-Signature-Timestamp']
    for index in range(len(timestamp)):
        digit = '1' if timestamp[index] != '1' else '2'
        tampered = timestamp[:index] + digit + timestamp[index + 1:]
        assert not verifier.verify(BODY, tampered, headers['X-Signature-Ed25519'])


def test_appended_body_byte_fails(verifier, sign) -> None:
    headers = sign(BODY)
    assert not verifier.verify(BODY + b' ', headers['X-Signature-Timestamp'], headers['X-Signature-Ed25519'])


@pytest.mark.parametrize('timestamp, signature', [
    (None, 'ab' * 64),
    ('1700000000', None),
    ('', 'ab' * 64),
    ('1700000000', ''),
])
def test_missing_headers_fail(verifier, timestamp, signature) -> None:
    assert not verifier.verify(BODY, timestamp, signature)


def test_non_hex_signature_fails(verifier) -> None:
    assert not verifier.verify(BODY, '1700000000', 'not-hex!')


def test_wrong_length_signature_fails(verifier, sign) -> None:
    signature = sign(BODY)['X-Signature-Ed25519']
    assert not verifier.verify(BODY, '1700000000', signature[:-2])


def test_other_key_signature_fails(sign) -> None:
    from nacl.signing import SigningKey

    other = SignatureVerifier(SigningKey.generate().verify_key.encode().hex())
    headers = sign(BODY)
    assert not other.verify(BODY, headers['X-Signature-Timestamp'], headers['X-Signature-Ed25519'])


@pytest.mark.parametrize('public_key', [None, '', 'zz' * 32, 'abc', 'ab' * 16])
def test_malformed_public_key_is_configuration_error(public_key) -> None:
    with pytest.raises(ConfigurationError):
        SignatureVerifier(public_key)
