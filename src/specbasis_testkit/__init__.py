# Lightweight package init: pytest is only imported once a runner or reporter is requested.
__all__ = ["ColorReporter", "SpecRunner", "load_config"]

def __getattr__(name):
    if name == "ColorReporter":
        from .reporters.console import ColorReporter as _ColorReporter
        return _ColorReporter
    if name == "SpecRunner":
        from .runners.runner import SpecRunner as _SpecRunner
        return _SpecRunner
    if name == "load_config":
        from .config import load_config as _load_config
        return _load_config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
