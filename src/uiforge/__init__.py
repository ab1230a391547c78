"""uiforge - vector markup to React components, with structural patching."""

__version__ = "0.1.0"
