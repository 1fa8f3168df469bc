"""
Module: signal_dispatcher.py
Location: src/core/log/
Version: 0.1.0

Process-wide table mapping OS signals to subscribed callbacks.

Each subscription owns a daemon worker thread that blocks until the
signal is dispatched, then runs its callback. The OS handler only
enqueues a wake-up, so callbacks never run inside signal context.
Tests drive dispatch() directly instead of sending real signals.
"""

from __future__ import annotations

import logging
import queue
import signal
import threading
from typing import Callable, Dict, List, Optional

_diag = logging.getLogger("src.core.log")


class SignalSubscription:
    """
    One callback bound to one signal, serviced by its own worker thread.
    """

    def __init__(self, signum: int, callback: Callable[[], None], name: str):
        self.signum = signum
        self.name = name
        self._callback = callback
        self._wakeups: queue.SimpleQueue = queue.SimpleQueue()
        self._cond = threading.Condition()
        self._deliveries = 0
        self._failures = 0

        self._thread = threading.Thread(
            target=self._run,
            name=f"signal-{signum}-{name}",
            daemon=True,
        )
        self._thread.start()

    @property
    def deliveries(self) -> int:
        with self._cond:
            return self._deliveries

    @property
    def failures(self) -> int:
        with self._cond:
            return self._failures

    def notify(self) -> None:
        # SimpleQueue.put is reentrant, safe from a signal handler
        self._wakeups.put(self.signum)

    def wait_for_deliveries(self, count: int, timeout: Optional[float] = None) -> bool:
        """
        Block until at least `count` callback runs have completed.
        """
        with self._cond:
            return self._cond.wait_for(lambda: self._deliveries >= count, timeout)

    def _run(self) -> None:
        # No exit path: the loop ends with the process.
        while True:
            self._wakeups.get()
            failed = False
            try:
                self._callback()
            except Exception as e:
                failed = True
                _diag.error("signal %s handler %s failed: %s", self.signum, self.name, e)

            with self._cond:
                self._deliveries += 1
                if failed:
                    self._failures += 1
                self._cond.notify_all()


class SignalDispatcher:
    """
    Delivers asynchronous external requests (log rotation, usually) to
    exactly the callbacks that subscribed for a given signal.
    """

    _default: Optional["SignalDispatcher"] = None
    _default_lock = threading.Lock()

    def __init__(self, *, install_handlers: bool = True):
        self._install_handlers = install_handlers
        self._lock = threading.Lock()
        self._subscriptions: Dict[int, List[SignalSubscription]] = {}
        self._installed: Dict[int, object] = {}

    @classmethod
    def default(cls) -> "SignalDispatcher":
        """
        Process-wide dispatcher, created on first use.
        """
        with cls._default_lock:
            if cls._default is None:
                cls._default = cls()
            return cls._default

    # -------------------------------------------------
    # Registration
    # -------------------------------------------------
    def subscribe(
        self,
        signum: int,
        callback: Callable[[], None],
        name: Optional[str] = None,
    ) -> SignalSubscription:
        """
        Register a callback for signum and start its worker.

        The OS handler is installed the first time a signal is subscribed.
        signal.signal only works from the main thread; the ValueError it
        raises elsewhere propagates to the caller.
        """
        signum = int(signum)
        label = name or getattr(callback, "__qualname__", "callback")

        with self._lock:
            if self._install_handlers and signum not in self._installed:
                self._installed[signum] = signal.signal(signum, self._handle)

            sub = SignalSubscription(signum, callback, label)
            self._subscriptions.setdefault(signum, []).append(sub)

        _diag.debug("subscribed %s to signal %s", label, signum)
        return sub

    # -------------------------------------------------
    # Delivery
    # -------------------------------------------------
    def dispatch(self, signum: int) -> int:
        """
        Wake every subscription for signum. Returns how many were woken.
        """
        # Read without the lock: this also runs from the OS handler, which
        # may interrupt a subscribe() that already holds it.
        subs = list(self._subscriptions.get(int(signum), ()))
        for sub in subs:
            sub.notify()
        return len(subs)

    def _handle(self, signum, frame) -> None:
        self.dispatch(signum)

    # -------------------------------------------------
    # Introspection
    # -------------------------------------------------
    def subscriptions(self, signum: Optional[int] = None) -> List[SignalSubscription]:
        with self._lock:
            if signum is not None:
                return list(self._subscriptions.get(int(signum), ()))
            return [s for subs in self._subscriptions.values() for s in subs]
