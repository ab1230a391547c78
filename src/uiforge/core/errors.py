"""Error taxonomy for the generation and patch pipelines."""


class UIForgeError(Exception):
    """Base class for pipeline errors."""


class ParseError(UIForgeError):
    """Markup is malformed, unsafe or too deeply nested. Fatal to a generate request."""


class UnresolvedComponentKey(UIForgeError):
    """A build node names a component key the palette does not hold."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown component key: {key}")
        self.key = key


class OracleUnavailable(UIForgeError):
    """The design-inference oracle is absent, timed out, failed or answered nonsense."""


class PatchError(UIForgeError):
    """A single patch op could not be applied."""


class PatchTargetNotFound(PatchError):
    """No structural node (or text) matched the op's locator."""

    def __init__(self, locator: str) -> None:
        super().__init__(f"target not found: {locator!r}")
        self.locator = locator


class UnsupportedClassValue(PatchError):
    """The className attribute is a dynamic expression and cannot be edited as tokens."""
