from trafficgen.events import format_timestamp


class ResultAggregator:
        """
        Single consumer of ResultEvents.

        Counts back-to-back errors in the order events arrive (not the order
        requests were sent). Once more than max_errors errors arrive in a row
        the aggregator turns fatal, calls on_fatal once and ignores everything
        after.
        """

        def __init__(self, max_errors, on_fatal=None):
                self.max_errors = max_errors
                self.on_fatal = on_fatal
                self.error_count = 0
                self.fatal = False
                self.total = 0
                self.successes = 0
                self.failures = 0

        def handle(self, event):
                if self.fatal:
                        return True

                ts = format_timestamp(event.timestamp)
                self.total += 1
                if event.is_error:
                        self.failures += 1
                        self.error_count += 1
                        print(ts, "ERROR:", event.text, flush=True)
                else:
                        self.successes += 1
                        self.error_count = 0
                        print(ts, event.text, flush=True)

                if self.error_count > self.max_errors:
                        self.fatal = True
                        if self.on_fatal:
                                self.on_fatal()
                return self.fatal

        def drain(self, q):
                while True:
                        event = q.get()
                        if event is None:
                                return
                        if self.handle(event):
                                return
