"""An arcade game about guiding kids across a busy road."""

__version__ = "0.1.0"
__all__ = ["app", "car", "game", "kid", "player"]