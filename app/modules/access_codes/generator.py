import secrets
import string
from typing import Optional

from app.config.settings import settings

ALPHABET = string.ascii_uppercase + string.digits


class CodeGenerator:
    """Genera códigos cortos en mayúsculas y dígitos, fáciles de teclear"""

    def __init__(self, length: Optional[int] = None, alphabet: str = ALPHABET):
        self.length = length or settings.access_code_length
        if self.length <= 0:
            raise ValueError("La longitud del código debe ser positiva")
        if not alphabet:
            raise ValueError("El alfabeto no puede estar vacío")
        self.alphabet = alphabet

    def generate(self) -> str:
        return "".join(secrets.choice(self.alphabet) for _ in range(self.length))


def normalize_code(codigo: str) -> str:
    """Los códigos se emiten en mayúsculas; se tolera lo que el usuario teclee"""
    return (codigo or "").strip().upper()
