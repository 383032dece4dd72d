"""Parse AT-command modem traffic into responses, URCs, prompts and errors."""

__version__ = "0.1.0"

__all__ = ["config", "digester", "errors", "helpers", "lengths", "matchers", "responses", "timer"]