import random
import threading
import time


class Scheduler:
        """
        Launch `task` on a fresh thread forever, pausing a random
        0..max_delay ms before each launch (no pause when max_delay <= 0).

        Launches never wait for earlier tasks, so any number may be in flight.
        Only stop_event ends the loop; running tasks are not cancelled.
        """

        def __init__(self, task, max_delay, stop_event, rng=None, wait=None):
                self.task = task
                self.max_delay = max_delay
                self.stop_event = stop_event
                self.rng = rng or random.Random()
                self.wait = wait or stop_event.wait
                self.launched = 0
                self._tasks = set()
                self._lock = threading.Lock()

        def jitter(self):
                return self.rng.randrange(self.max_delay) / 1000.0

        @property
        def in_flight(self):
                with self._lock:
                        return len(self._tasks)

        def _run_task(self):
                try:
                        self.task()
                finally:
                        with self._lock:
                                self._tasks.discard(threading.current_thread())

        def launch(self):
                t = threading.Thread(target=self._run_task, name=f"request-{self.launched + 1}", daemon=True)
                with self._lock:
                        self._tasks.add(t)
                self.launched += 1
                t.start()
                return t

        def run(self):
                while not self.stop_event.is_set():
                        if self.max_delay > 0:
                                if self.wait(self.jitter()):
                                        break
                                if self.stop_event.is_set():
                                        break
                        self.launch()

        def join(self, timeout=None):
                with self._lock:
                        tasks = list(self._tasks)
                deadline = None if timeout is None else time.monotonic() + timeout
                for t in tasks:
                        t.join(None if deadline is None else max(0, deadline - time.monotonic()))
