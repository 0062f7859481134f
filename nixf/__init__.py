"""Error-tolerant lexer and parser for the Nix expression language, with diagnostics."""

__version__ = "0.1.0"
__all__ = ["diagnostic", "lexer", "nodes", "parser", "range", "token"]