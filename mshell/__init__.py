"""Shell core: expansion, redirections, here-documents, pipes, lists and builtins over a command tree."""

__version__ = "0.1.0"