class BencodeError(ValueError):
    """Base class for everything the codec and the inspector raise."""

    def __init__(self, message, offset=None):
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)
        self.offset = offset


class MalformedInput(BencodeError):
    """The input violates the bencode grammar."""


class UnsupportedTag(MalformedInput):
    def __init__(self, tag: int, offset=None):
        super().__init__(f"Unsupported bencode type identifier {bytes([tag])!r}", offset)
        self.tag = tag


class DuplicateKey(MalformedInput):
    def __init__(self, key: bytes, offset=None):
        super().__init__(f"Duplicate dictionary key {key!r}", offset)
        self.key = key


class LimitExceeded(BencodeError):
    """Nesting depth or input size is over the configured limit."""


class MissingField(BencodeError):
    def __init__(self, field: str, expected: str):
        super().__init__(f"Missing or invalid field '{field}' (expected {expected})")
        self.field = field
        self.expected = expected
