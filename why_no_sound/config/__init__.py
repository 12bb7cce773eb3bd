"""Configuration package utilities."""

__all__ = ["ConfigController", "ConfigError", "Settings"]


def __getattr__(name: str):
    if name in __all__:
        from why_no_sound.config import controller

        return getattr(controller, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
