# duplicator/utils.py
from cryptography.fernet import Fernet, InvalidToken
from django.conf import settings

def _fernet() -> Fernet:
    return Fernet(settings.FERNET_KEY.encode())

def encrypt_token(token: str) -> str:
    return _fernet().encrypt(token.encode()).decode()

def decrypt_token(token: str) -> str | None:
    # A cookie written under a rotated key is treated as no token at all.
    try:
        return _fernet().decrypt(token.encode()).decode()
    except InvalidToken:
        return None
