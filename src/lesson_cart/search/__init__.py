from .debouncer import Debouncer, DEFAULT_DELAY

__all__ = ["Debouncer", "DEFAULT_DELAY"]
