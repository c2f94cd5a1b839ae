#!/usr/bin/env python3
"""
main.py - jittered HTTP traffic generator

Usage example:
    python -m trafficgen --url http://localhost:8080/search?q= --delay 200 --src novel --file book.txt

Requests are fired at random intervals without waiting for earlier ones to
finish. Every outcome is printed; the run aborts once more than --max-errors
requests fail back to back.
"""

import argparse
import queue
import signal
import sys
import threading
import time

import requests

from trafficgen.aggregator import ResultAggregator
from trafficgen.body_source import get_body_source
from trafficgen.config import Config
from trafficgen.executor import RequestExecutor
from trafficgen.scheduler import Scheduler

EXIT_SOURCE_ERROR = 1
EXIT_TOO_MANY_ERRORS = 3


def non_negative_int(value):
        n = int(value)
        if n < 0:
                raise argparse.ArgumentTypeError(f"{value} must be >= 0")
        return n


def build_parser():
        parser = argparse.ArgumentParser(prog="trafficgen", description="Send HTTP requests at random intervals until too many fail in a row.")
        parser.add_argument("--delay", type=int, default=500, help="Maximum delay between successive requests in ms, 0 disables pacing (default: 500)")
        parser.add_argument("--max-errors", type=non_negative_int, default=100, help="Max number of successive errors before terminating (default: 100)")
        parser.add_argument("--log-length", type=non_negative_int, default=1000, help="Maximum length of response body to print (default: 1000)")
        parser.add_argument("--url", default="localhost", help="The url to make requests to")
        parser.add_argument("--method", default="GET", help="The HTTP method to use in the request")
        parser.add_argument("--content-type", default="", help="Content-Type header")
        parser.add_argument("--auth", default="", help="Authorization header (replaced by the built-in basic auth credentials)")
        parser.add_argument("--src", default="", help="Data source for requests, valid option is 'novel'. Used as the URL suffix for GET and the body otherwise")
        parser.add_argument("--file", default="", help="Input file for file source types")
        parser.add_argument("--header", "-H", action="append", help="Custom header, can be repeated. Format: 'Name: Value'")
        parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds (default: none)")
        return parser


def print_summary(aggregator, scheduler, elapsed):
        print("\n=== Summary ===")
        print(f"Total sent:    {scheduler.launched}")
        print(f"Completed:     {aggregator.total}")
        print(f"Successful:    {aggregator.successes}")
        print(f"Failed/error:  {aggregator.failures}")
        print(f"Elapsed (s):   {elapsed:.2f}")
        if elapsed > 0:
                print(f"Requests/sec:  {scheduler.launched / elapsed:.2f}")


def main(argv=None):
        args = build_parser().parse_args(argv)
        config = Config.from_args(args)

        try:
                source = get_body_source(args.src, args.file)
        except OSError as e:
                print("Could not create input stream from", args.src, args.file, e, file=sys.stderr)
                return EXIT_SOURCE_ERROR

        results = queue.Queue()
        stop_event = threading.Event()

        aggregator = ResultAggregator(config.max_errors, on_fatal=stop_event.set)
        consumer = threading.Thread(target=aggregator.drain, args=(results,), name="aggregator", daemon=True)
        consumer.start()

        with requests.Session() as session:
                executor = RequestExecutor(config, source, results, session)
                scheduler = Scheduler(executor.run, config.delay, stop_event)

                def handle_sigint(signum, frame):
                        stop_event.set()
                        print("\nStopping...", file=sys.stderr)

                previous_handler = signal.signal(signal.SIGINT, handle_sigint)
                start = time.perf_counter()
                try:
                        scheduler.run()
                except KeyboardInterrupt:
                        stop_event.set()
                finally:
                        if previous_handler is not None:
                                signal.signal(signal.SIGINT, previous_handler)

                if aggregator.fatal:
                        # in-flight requests are abandoned, their results are lost
                        print("Too many errors. Exiting", file=sys.stderr)
                        return EXIT_TOO_MANY_ERRORS

                scheduler.join(timeout=1)
                results.put(None)
                consumer.join(timeout=1)
                print_summary(aggregator, scheduler, time.perf_counter() - start)
        return 0


if __name__ == "__main__":
        sys.exit(main())
