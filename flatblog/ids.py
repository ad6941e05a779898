import secrets
import string

from typing_extensions import Protocol

SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
SUFFIX_LENGTH = 5


def date_to_id_prefix(date: str) -> str:
    """2024.12.11 -> 2024-12-11"""
    return date.replace(".", "-")


class IdGenerator(Protocol):
    def __call__(self, date: str) -> str:
        ...


class RandomIdGenerator:
    def __call__(self, date: str) -> str:
        suffix = "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
        return f"{date_to_id_prefix(date)}-{suffix}"
