from collections import namedtuple
from urllib.parse import quote

from bencoding import Decoder, Encoder
from errors import MalformedInput, MissingField
from utils import logger, sha1_hash, split_hashes

MetainfoReport = namedtuple("MetainfoReport", ["tracker_url", "length", "info_hash_hex"])


def _require(mapping, key: bytes, kind, field: str, expected: str):
    value = mapping.get(key)
    if not isinstance(value, kind) or isinstance(value, bool):
        raise MissingField(field, expected)
    return value


def find_metainfo(values):
    """Returns the first top-level dictionary."""
    for value in values:
        if isinstance(value, dict):
            return value
    raise MissingField("<root>", "a dictionary")


def info_hash(info) -> bytes:
    """SHA-1 of the canonical encoding of the info dictionary alone."""
    return sha1_hash(Encoder.encode(info))


def inspect(values) -> MetainfoReport:
    """
    Reports tracker URL, payload length and hex info hash of the first
    top-level dictionary in values.
    """
    meta_info = find_metainfo(values)

    announce = _require(meta_info, b'announce', bytes, "announce", "a string")
    info = _require(meta_info, b'info', dict, "info", "a dictionary")
    length = _require(info, b'length', int, "info.length", "an integer")

    return MetainfoReport(
        tracker_url=announce.decode('utf-8', errors='replace'),
        length=length,
        info_hash_hex=info_hash(info).hex(),
    )


class Torrent:
    """
    A read-only view of a metainfo file.
    Only 'info' is required here; every other field falls back to an empty value.
    """
    def __init__(self, meta_info):
        if not isinstance(meta_info, dict):
            raise MissingField("<root>", "a dictionary")
        self.meta_info = meta_info

        # 1. Extract Announce URL (The Tracker)
        self.announce = self._text(meta_info.get(b'announce'))
        self.announce_list = self._get_announce_list()

        # 2. Extract Info Dictionary
        self.info = _require(meta_info, b'info', dict, "info", "a dictionary")
        self.name = self._text(self.info.get(b'name'))
        self.piece_length = self._int(self.info.get(b'piece length'))

        # 3. Calculate Info Hash (This is the unique ID of the torrent)
        self.info_hash = info_hash(self.info)

        # 4. Handle Files (Single vs Multi-file)
        self.files = self._parse_files()
        self.total_length = sum(f['length'] for f in self.files)

        # 5. Parse Piece Hashes
        self.piece_hashes = self._parse_piece_hashes()

        logger.debug(f"Loaded Torrent: {self.name or '<unnamed>'}")
        logger.debug(f"Files: {len(self.files)}, Size: {self.total_length} bytes")
        logger.debug(f"Pieces: {len(self.piece_hashes)} (Length: {self.piece_length})")
        logger.debug(f"Info Hash: {self.info_hash_hex}")

    @classmethod
    def from_bytes(cls, data, **options):
        values, _ = Decoder(data, **options).decode()
        return cls(find_metainfo(values))

    @classmethod
    def from_file(cls, file_path, max_size=None, **options):
        with open(file_path, 'rb') as f:
            data = f.read() if max_size is None else f.read(max_size)
        return cls.from_bytes(data, **options)

    @property
    def info_hash_hex(self) -> str:
        return self.info_hash.hex()

    def magnet_link(self) -> str:
        magnet = f"magnet:?xt=urn:btih:{self.info_hash_hex}"
        name = self.info.get(b'name')
        if isinstance(name, bytes) and name:
            try:
                magnet += f"&dn={quote(name.decode('utf-8'))}"
            except UnicodeDecodeError:
                # dn is optional, a non-UTF-8 name is left out
                return magnet
        return magnet

    @staticmethod
    def _text(value):
        if isinstance(value, bytes):
            return value.decode('utf-8', errors='replace')
        return ""

    @staticmethod
    def _int(value):
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0

    def _get_announce_list(self):
        """Returns a list of all tracker URLs."""
        trackers = []
        tiers = self.meta_info.get(b'announce-list')
        if isinstance(tiers, list):
            for tier in tiers:
                if not isinstance(tier, list):
                    continue
                for url in tier:
                    url = self._text(url)
                    if url and url not in trackers:
                        trackers.append(url)
        if not trackers and self.announce:
            trackers.append(self.announce)
        return trackers

    def _parse_files(self):
        files = []
        entries = self.info.get(b'files')
        if isinstance(entries, list):
            # Multi-file mode
            for f in entries:
                if not isinstance(f, dict):
                    continue
                parts = f.get(b'path')
                if not isinstance(parts, list):
                    parts = []
                path = '/'.join(self._text(p) for p in parts)
                files.append({'length': self._int(f.get(b'length')), 'path': path})
        elif b'length' in self.info:
            # Single-file mode
            files.append({'length': self._int(self.info[b'length']), 'path': self.name})
        return files

    def _parse_piece_hashes(self):
        """
        The 'pieces' string is a concatenation of 20-byte SHA1 hashes.
        We split it into a list.
        """
        pieces = self.info.get(b'pieces', b'')
        if not isinstance(pieces, bytes):
            raise MalformedInput("'pieces' must be a string")
        hashes = split_hashes(pieces)
        if hashes is None:
            raise MalformedInput("Invalid piece hash length")
        return hashes
