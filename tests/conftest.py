import os

import pytest
from nacl.signing import SigningKey

# No Cloud Trace exporter in tests
os.environ.setdefault('LOCAL_DEV', '1')

from interaction_router.dispatcher import InteractionDispatcher  # noqa: E402
from interaction_router.observability import StructuredLogger  # noqa: E402
from interaction_router.registry import CommandRegistry  # noqa: E402
from interaction_router.verifier import SignatureVerifier  # noqa: E402

TIMESTAMP = '1700000000'


@pytest.fixture
def anyio_backend() -> str:
    return 'asyncio'


@pytest.fixture(scope='session')
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture(scope='session')
def public_key_hex(signing_key: SigningKey) -> str:
    return signing_key.verify_key.encode().hex()


@pytest.fixture
def sign(signing_key: SigningKey):
    def _sign(body: bytes, timestamp: str = TIMESTAMP) -> dict:
        signature = signing_key.sign(timestamp.encode() + body).signature
        return {
            'X-Signature-Ed25519': signature.hex(),
            'X-Signature-Timestamp': timestamp,
        }

    return _sign


@pytest.fixture
def logger() -> StructuredLogger:
    return StructuredLogger('interaction-router-test')


@pytest.fixture
def verifier(public_key_hex: str, logger: StructuredLogger) -> SignatureVerifier:
    return SignatureVerifier(public_key_hex, logger=logger)


@pytest.fixture
def registry() -> CommandRegistry:
    return CommandRegistry()


@pytest.fixture
def dispatcher(verifier, registry, logger) -> InteractionDispatcher:
    return InteractionDispatcher(verifier, registry, logger=logger, handler_timeout=1.0)
