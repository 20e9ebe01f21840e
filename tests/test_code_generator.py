"""Tests for access code value generation."""

import string

import pytest

from app.config.settings import settings
from app.modules.access_codes.generator import CodeGenerator, normalize_code


class TestCodeGenerator:

    def test_default_length_comes_from_settings(self):
        codigo = CodeGenerator().generate()
        assert len(codigo) == settings.access_code_length == 8

    def test_uppercase_alphanumeric_only(self):
        generator = CodeGenerator()
        allowed = set(string.ascii_uppercase + string.digits)
        for _ in range(200):
            assert set(generator.generate()) <= allowed

    def test_values_vary(self):
        generator = CodeGenerator()
        assert len({generator.generate() for _ in range(50)}) > 45

    def test_custom_length_and_alphabet(self):
        codigo = CodeGenerator(length=6, alphabet="AB").generate()
        assert len(codigo) == 6
        assert set(codigo) <= {"A", "B"}

    def test_rejects_empty_alphabet(self):
        with pytest.raises(ValueError):
            CodeGenerator(alphabet="")

    def test_fits_code_column(self):
        assert len(CodeGenerator(length=10).generate()) <= 10


class TestNormalizeCode:

    def test_strips_and_uppercases(self):
        assert normalize_code("  ab12cd34 ") == "AB12CD34"

    def test_none_becomes_empty(self):
        assert normalize_code(None) == ""
