"""
Process-local credential store for development and tests.
"""

import asyncio
import hmac
import os
from dataclasses import dataclass, field
from typing import Dict

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from shared.logging import get_logger
from ..errors import InvalidCredentials, SubjectAlreadyExists
from .gateway import Credentials

PBKDF2_ITERATIONS = 100000
SALT_BYTES = 16


def _derive(secret: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(secret.encode("utf-8"))


@dataclass
class SubjectRecord:
    subject_id: str
    salt: bytes = field(repr=False)
    digest: bytes = field(repr=False)
    profile: Dict[str, str] = field(default_factory=dict)


class InMemoryCredentialGateway:
    """Credential gateway keeping salted PBKDF2 digests in a dict.

    Key derivation runs in a worker thread. Membership is checked again
    after it returns, so concurrent creates of one subject insert once.
    """

    def __init__(self, iterations: int = PBKDF2_ITERATIONS):
        self.iterations = iterations
        self._subjects: Dict[str, SubjectRecord] = {}
        self.logger = get_logger("auth.users.memory")

    async def create_subject(self, credentials: Credentials, profile: Dict[str, str]) -> None:
        if credentials.subject_id in self._subjects:
            raise SubjectAlreadyExists(credentials.subject_id)

        salt = os.urandom(SALT_BYTES)
        digest = await asyncio.to_thread(_derive, credentials.secret, salt, self.iterations)

        # Another create for this subject may have finished during derivation
        if credentials.subject_id in self._subjects:
            raise SubjectAlreadyExists(credentials.subject_id)

        self._subjects[credentials.subject_id] = SubjectRecord(
            subject_id=credentials.subject_id,
            salt=salt,
            digest=digest,
            profile=dict(profile),
        )
        self.logger.info("Subject created", subject_id=credentials.subject_id)

    async def verify_credentials(self, credentials: Credentials) -> None:
        record = self._subjects.get(credentials.subject_id)
        if record is None:
            raise InvalidCredentials()

        digest = await asyncio.to_thread(_derive, credentials.secret, record.salt, self.iterations)
        if not hmac.compare_digest(digest, record.digest):
            raise InvalidCredentials()

    async def check_health(self) -> str:
        return "ok"

    def get_profile(self, subject_id: str) -> Dict[str, str]:
        record = self._subjects.get(subject_id)
        return dict(record.profile) if record else {}
