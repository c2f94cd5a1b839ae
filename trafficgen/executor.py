"""
One request/response cycle per call.

Every call reports exactly one ResultEvent: failures at any stage (request
preparation, send, body read) become error events carrying the
exception message instead of propagating.
"""

import re
import time
from urllib.parse import quote_from_bytes

import requests
from requests.auth import HTTPBasicAuth

from trafficgen.events import ResultEvent, quote_body


_ESCAPED = re.compile("[\udc80-\udcff]+")


def url_suffix(payload):
        # bytes that are not valid UTF-8 go out percent-encoded instead of failing
        text = payload.decode("utf-8", errors="surrogateescape")
        return _ESCAPED.sub(lambda m: quote_from_bytes(m.group().encode("utf-8", errors="surrogateescape")), text)


def _message(e):
        return str(e) or e.__class__.__name__


class RequestExecutor:
        def __init__(self, config, source, results, session=None):
                self.config = config
                self.source = source
                self.results = results
                self.session = session or requests.Session()

        def build_request(self, payload):
                url = self.config.url
                data = None
                if self.config.is_get:
                        if payload is not None:
                                # appended as is; requests still requotes it during preparation
                                url += url_suffix(payload)
                else:
                        data = payload

                headers = dict(self.config.headers)
                if self.config.auth:
                        headers["Authorization"] = self.config.auth
                if self.config.content_type:
                        headers["Content-Type"] = self.config.content_type

                # basic auth is applied during preparation, after the headers above
                return requests.Request(
                        method=self.config.method,
                        url=url,
                        headers=headers,
                        data=data,
                        auth=HTTPBasicAuth(*self.config.basic_auth),
                )

        def execute(self):
                req = self.build_request(self.source.next())
                try:
                        prepared = self.session.prepare_request(req)
                except (requests.RequestException, ValueError) as e:
                        return ResultEvent.failure(_message(e))

                start = time.perf_counter()
                try:
                        resp = self.session.send(prepared, stream=True, timeout=self.config.timeout)
                except Exception as e:
                        return ResultEvent.failure(_message(e))
                elapsed = time.perf_counter() - start

                try:
                        body = resp.content
                except Exception as e:
                        return ResultEvent.failure(_message(e))
                finally:
                        resp.close()

                if len(body) > self.config.log_length:
                        body = body[:self.config.log_length]

                return ResultEvent.success(
                        f"Received response after {int(elapsed * 1000)} ms. "
                        f"{self.config.method} {req.url} {resp.status_code}: {quote_body(body)}"
                )

        def run(self):
                self.results.put(self.execute())
