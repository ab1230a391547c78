"""Class-list token operations (order-preserving, duplicate-free)."""


def split_tokens(value: str) -> list[str]:
    """Whitespace-separated tokens, first occurrence kept."""
    return list(dict.fromkeys(value.split()))


def join_tokens(tokens: list[str]) -> str:
    return " ".join(dict.fromkeys(t for t in tokens if t))


def add_class(value: str, token: str) -> str:
    tokens = split_tokens(value)
    if token not in tokens:
        tokens.append(token)
    return join_tokens(tokens)


def remove_class(value: str, token: str) -> str:
    return join_tokens([t for t in split_tokens(value) if t != token])


def replace_class(value: str, old: str, new: str) -> str:
    return join_tokens([new if t == old else t for t in split_tokens(value)])
