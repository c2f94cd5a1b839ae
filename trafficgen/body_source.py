"""
Payload providers for request bodies (or URL suffixes on GET).

"novel" replays a text file one sentence at a time; anything else sends no
payload at all.
"""

import errno
import threading


NOVEL = "novel"
DELIMITER = b"."


class EmptySource:
        """Source for requests without a body."""

        def next(self):
                return None


class CorpusSource:
        def __init__(self, fragments):
                if not fragments:
                        raise ValueError("corpus must contain at least one fragment")
                self.fragments = list(fragments)
                self._pos = 0
                self._lock = threading.Lock()

        @classmethod
        def from_file(cls, filename):
                # whole book fits in memory; OSError propagates to the caller
                with open(filename, "rb") as f:
                        book = f.read()
                return cls(book.split(DELIMITER))

        @property
        def position(self):
                with self._lock:
                        return self._pos

        def next(self):
                with self._lock:
                        fragment = self.fragments[self._pos]
                        self._pos += 1
                        if self._pos >= len(self.fragments):
                                self._pos = 0
                return fragment


def get_body_source(name, filename=None):
        if name == NOVEL:
                if not filename:
                        raise FileNotFoundError(errno.ENOENT, "no input file given for source", name)
                return CorpusSource.from_file(filename)
        return EmptySource()
