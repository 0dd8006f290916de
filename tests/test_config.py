# =============================================================================
# test_config.py - Precedence Table and Configuration Tests
# =============================================================================
# Tests for the binary operator table and FrontendConfig, including the
# environment variable overrides.
# =============================================================================

import pytest
from kaleidoscope.frontend.config import FrontendConfig
from kaleidoscope.frontend.lexer import Token, TokenType
from kaleidoscope.frontend.precedence import (
    DEFAULT_BINOP_PRECEDENCE,
    NOT_AN_OPERATOR,
    PrecedenceTable,
)


def char_token(char: str) -> Token:
    return Token(TokenType.CHAR, char, 1, 1)


# =============================================================================
# Precedence Table Tests
# =============================================================================

class TestPrecedenceTable:
    """Lookup, registration and removal of operators."""

    def test_default_entries(self):
        """A new table holds the four default operators."""
        table = PrecedenceTable()
        assert table.as_dict() == {"<": 10, "+": 20, "-": 20, "*": 40}
        assert len(table) == 4

    def test_lookup_registered(self):
        """Registered operators return their precedence."""
        table = PrecedenceTable()
        assert table.lookup(char_token("*")) == 40
        assert table.lookup(char_token("<")) == 10

    def test_lookup_unregistered_char(self):
        """Unregistered characters are not operators."""
        assert PrecedenceTable().lookup(char_token("/")) == NOT_AN_OPERATOR

    @pytest.mark.parametrize("token", [
        Token(TokenType.IDENTIFIER, "x", 1, 1),
        Token(TokenType.NUMBER, 1.0, 1, 1),
        Token(TokenType.DEF, "def", 1, 1),
        Token(TokenType.EOF, None, 1, 1),
    ])
    def test_lookup_non_char_tokens(self, token):
        """Only CHAR tokens can be operators."""
        assert PrecedenceTable().lookup(token) == NOT_AN_OPERATOR

    def test_lookup_non_ascii(self):
        """Non-ASCII characters are never operators."""
        assert PrecedenceTable().lookup(char_token("é")) == NOT_AN_OPERATOR

    def test_register_and_unregister(self):
        """Operators can be added, replaced and removed."""
        table = PrecedenceTable()
        table.register("/", 40)
        assert table.lookup(char_token("/")) == 40
        table.register("/", 5)
        assert table["/"] == 5
        table.unregister("/")
        assert "/" not in table
        table.unregister("/")  # unknown operators are ignored

    @pytest.mark.parametrize("op,prec", [
        ("", 10),
        ("<=", 10),
        ("é", 10),
        ("/", 0),
        ("/", -5),
        ("/", True),
        ("/", 2.5),
    ])
    def test_register_invalid(self, op, prec):
        """Bad operators or precedences are rejected."""
        with pytest.raises(ValueError):
            PrecedenceTable().register(op, prec)

    def test_tables_do_not_share_defaults(self):
        """Changing one table leaves new tables and the defaults alone."""
        table = PrecedenceTable()
        table.unregister("*")
        assert "*" in PrecedenceTable()
        assert DEFAULT_BINOP_PRECEDENCE["*"] == 40

    def test_copy(self):
        """A copy is independent of the original."""
        table = PrecedenceTable({"+": 20})
        clone = table.copy()
        clone.register("*", 40)
        assert list(table) == ["+"]
        assert sorted(clone) == ["*", "+"]

    def test_repr(self):
        assert repr(PrecedenceTable({"+": 20, "<": 10})) == "PrecedenceTable({'<': 10, '+': 20})"


# =============================================================================
# Configuration Tests
# =============================================================================

class TestFrontendConfig:
    """Defaults, validation and environment overrides."""

    def test_defaults(self):
        config = FrontendConfig()
        assert config.filename == "<input>"
        assert config.strict_numbers is False
        assert config.binop_precedence == DEFAULT_BINOP_PRECEDENCE

    def test_set_precedence(self):
        config = FrontendConfig()
        config.set_precedence("/", 40)
        assert config.binop_precedence["/"] == 40

    def test_set_precedence_invalid(self):
        with pytest.raises(ValueError):
            FrontendConfig().set_precedence("//", 40)

    def test_build_precedence_table_is_fresh(self):
        """Each session gets its own table."""
        config = FrontendConfig()
        first = config.build_precedence_table()
        first.register("%", 50)
        assert "%" not in config.build_precedence_table()
        assert "%" not in config.binop_precedence

    def test_from_env_defaults(self, monkeypatch):
        """No environment variables means plain defaults."""
        monkeypatch.delenv("KALEIDOSCOPE_STRICT_NUMBERS", raising=False)
        monkeypatch.delenv("KALEIDOSCOPE_PRECEDENCE", raising=False)
        assert FrontendConfig.from_env() == FrontendConfig()

    @pytest.mark.parametrize("value,expected", [
        ("1", True),
        ("true", True),
        ("YES", True),
        (" on ", True),
        ("0", False),
        ("off", False),
    ])
    def test_from_env_strict_numbers(self, monkeypatch, value, expected):
        monkeypatch.setenv("KALEIDOSCOPE_STRICT_NUMBERS", value)
        assert FrontendConfig.from_env().strict_numbers is expected

    def test_from_env_precedence(self, monkeypatch):
        """Entries are added to the default table."""
        monkeypatch.setenv("KALEIDOSCOPE_PRECEDENCE", "/:40 >:10 +:30")
        precedence = FrontendConfig.from_env().binop_precedence
        assert precedence["/"] == 40
        assert precedence[">"] == 10
        assert precedence["+"] == 30
        assert precedence["*"] == 40

    def test_from_env_colon_operator(self, monkeypatch):
        """':' itself can be registered."""
        monkeypatch.setenv("KALEIDOSCOPE_PRECEDENCE", "::5")
        assert FrontendConfig.from_env().binop_precedence[":"] == 5

    def test_from_env_invalid_entries_ignored(self, monkeypatch, caplog):
        """Invalid entries are logged and skipped."""
        monkeypatch.setenv("KALEIDOSCOPE_PRECEDENCE", "/:x ab:3 %:0 nocolon ^:7")
        with caplog.at_level("WARNING", logger="kaleidoscope.frontend.config"):
            precedence = FrontendConfig.from_env().binop_precedence
        assert precedence == {**DEFAULT_BINOP_PRECEDENCE, "^": 7}
        assert len(caplog.records) == 4
