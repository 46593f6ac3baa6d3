from .casing import to_snake

__all__ = ["to_snake"]
