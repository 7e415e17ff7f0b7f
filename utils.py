import hashlib
import logging

# Configure logging to look professional
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger("bencode")


def set_verbose(verbose: bool):
    """Switches the project logger between WARNING and DEBUG."""
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def sha1_hash(data: bytes) -> bytes:
    """Computes the SHA-1 hash of the given binary data."""
    return hashlib.sha1(data).digest()


def split_hashes(blob: bytes, size=20):
    """
    Splits a concatenation of fixed-size digests into a list.
    Returns None when the blob length is not a multiple of size.
    """
    if len(blob) % size != 0:
        return None
    return [blob[i: i + size] for i in range(0, len(blob), size)]
