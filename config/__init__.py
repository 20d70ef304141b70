"""Configuration package utilities."""

__all__ = ["ProbeSettings"]


def __getattr__(name: str):
    if name == "ProbeSettings":
        from config.settings import ProbeSettings

        return ProbeSettings
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
