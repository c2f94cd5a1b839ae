import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class ResultEvent:
        timestamp: int
        text: str
        is_error: bool = False

        @classmethod
        def success(cls, text):
                return cls(time.time_ns(), text, False)

        @classmethod
        def failure(cls, text):
                return cls(time.time_ns(), text, True)


def format_timestamp(ns, tz=None):
        """
        Format nanoseconds since the epoch as RFC3339 with nanosecond precision.

        Trailing zeros of the fraction are dropped (and the fraction entirely
        when it is zero); UTC is written as "Z". Local time is used when tz is
        None.
        """
        secs, frac = divmod(ns, 1_000_000_000)
        dt = datetime.fromtimestamp(secs, tz=tz or timezone.utc)
        if tz is None:
                dt = dt.astimezone()
        out = dt.strftime("%Y-%m-%dT%H:%M:%S")
        if frac:
                out += "." + f"{frac:09d}".rstrip("0")
        offset = dt.utcoffset()
        if not offset:
                return out + "Z"
        minutes = int(offset.total_seconds()) // 60
        sign = "+" if minutes >= 0 else "-"
        hours, minutes = divmod(abs(minutes), 60)
        return f"{out}{sign}{hours:02d}:{minutes:02d}"


def quote_body(body):
        # bytes that are not valid UTF-8 (e.g. a cut multi-byte char) stay visible as \xNN
        return json.dumps(body.decode("utf-8", errors="backslashreplace"), ensure_ascii=False)
