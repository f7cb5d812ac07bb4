import hashlib
import hmac
import secrets


CODE_BYTES = 24


def generate_verification_code() -> str:
    return secrets.token_urlsafe(CODE_BYTES)


def hash_verification_code(code: str) -> str:
    """Only the SHA-256 hex digest of a code is ever stored"""
    return hashlib.sha256(code.encode('utf-8')).hexdigest()


def verification_code_matches(*, code: str, code_hash: str | None) -> bool:
    if not code or not code_hash:
        return False
    return hmac.compare_digest(hash_verification_code(code), code_hash)
