from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


# Applied to every request after --auth, so it always replaces that header.
DEFAULT_BASIC_AUTH = ("david", "ABC!@#abc123")


def parse_headers(header_list):
        headers = {}
        if not header_list:
                return headers
        for h in header_list:
                if ":" in h:
                        k, v = h.split(":", 1)
                        headers[k.strip()] = v.strip()
        return headers


@dataclass(frozen=True)
class Config:
        url: str = "localhost"
        method: str = "GET"
        content_type: str = ""
        auth: str = ""
        basic_auth: Tuple[str, str] = DEFAULT_BASIC_AUTH
        delay: int = 500
        max_errors: int = 100
        log_length: int = 1000
        headers: Dict[str, str] = field(default_factory=dict)
        timeout: Optional[float] = None

        @property
        def is_get(self):
                return self.method.upper() == "GET"

        @classmethod
        def from_args(cls, args):
                return cls(
                        url=args.url,
                        method=args.method,
                        content_type=args.content_type or "",
                        auth=args.auth or "",
                        delay=args.delay,
                        max_errors=args.max_errors,
                        log_length=args.log_length,
                        headers=parse_headers(args.header),
                        timeout=args.timeout,
                )
