"""
Unit tests for ProcessSignalHandler.

Sends real signals to the test process, so these only run on POSIX.
"""

import os
import signal
import sys
import time

import pytest

from jshellw.core.exceptions import SessionTerminatedError
from jshellw.services.execution import ProcessSignalHandler, termination_signals
from jshellw.services.logging import NullLogger

pytestmark = pytest.mark.skipif(
    sys.platform.startswith("win"), reason="os.kill delivery of POSIX signals"
)


def _wait_for_signal(seconds: float = 2.0) -> None:
    """Sleep in short steps so a pending handler gets to run."""
    deadline = time.monotonic() + seconds
    while time.monotonic() < deadline:
        time.sleep(0.01)


class TestTerminationSignals:
    def test_posix_signals(self):
        assert termination_signals() == [signal.SIGTERM, signal.SIGHUP]


class TestInterrupts:
    def test_sigint_counted_not_raised(self):
        handler = ProcessSignalHandler(logger=NullLogger())

        with handler:
            os.kill(os.getpid(), signal.SIGINT)
            _wait_for_signal(0.2)
            os.kill(os.getpid(), signal.SIGINT)
            _wait_for_signal(0.2)

        assert handler.is_interrupted()
        assert handler.get_interrupt_count() == 2
        assert handler.terminated_by is None

    def test_sigint_left_alone_when_not_handled(self):
        original = signal.getsignal(signal.SIGINT)
        handler = ProcessSignalHandler(handle_interrupts=False, logger=NullLogger())

        with handler:
            assert signal.getsignal(signal.SIGINT) is original

        assert not handler.is_interrupted()


class TestTermination:
    @pytest.mark.parametrize("signum", [signal.SIGTERM, signal.SIGHUP])
    def test_termination_raises(self, signum):
        handler = ProcessSignalHandler(logger=NullLogger())

        with pytest.raises(SessionTerminatedError) as exc_info, handler:
            os.kill(os.getpid(), signum)
            _wait_for_signal()

        assert exc_info.value.signum == signum
        assert exc_info.value.exit_code == 128 + signum
        assert handler.terminated_by == signum

    def test_on_terminate_callback(self):
        received = []
        handler = ProcessSignalHandler(on_terminate=received.append, logger=NullLogger())

        with pytest.raises(SessionTerminatedError), handler:
            os.kill(os.getpid(), signal.SIGTERM)
            _wait_for_signal()

        assert received == [signal.SIGTERM]

    def test_second_termination_ignored(self):
        handler = ProcessSignalHandler(logger=NullLogger())
        handler.install()
        try:
            with pytest.raises(SessionTerminatedError):
                handler._handle_termination(signal.SIGTERM, None)
            handler._handle_termination(signal.SIGHUP, None)
        finally:
            handler.restore()

        assert handler.terminated_by == signal.SIGTERM


class TestRestore:
    def test_original_handlers_restored(self):
        originals = {s: signal.getsignal(s) for s in (signal.SIGINT, *termination_signals())}
        handler = ProcessSignalHandler(logger=NullLogger())

        with handler:
            assert signal.getsignal(signal.SIGTERM) == handler._handle_termination
            assert signal.getsignal(signal.SIGINT) == handler._handle_interrupt

        for signum, original in originals.items():
            assert signal.getsignal(signum) == original

    def test_restore_without_install(self):
        handler = ProcessSignalHandler(logger=NullLogger())

        handler.restore()

    def test_nested_handlers(self):
        """An inner handler hands the signals back to the outer one."""
        outer = ProcessSignalHandler(handle_interrupts=False, logger=NullLogger())
        inner = ProcessSignalHandler(logger=NullLogger())

        with outer:
            with inner:
                assert signal.getsignal(signal.SIGTERM) == inner._handle_termination
            assert signal.getsignal(signal.SIGTERM) == outer._handle_termination


class TestDeferred:
    def test_termination_held_until_block_ends(self):
        handler = ProcessSignalHandler(logger=NullLogger())
        finished = []

        with pytest.raises(SessionTerminatedError) as exc_info, handler:
            with handler.deferred():
                os.kill(os.getpid(), signal.SIGTERM)
                _wait_for_signal(0.2)
                finished.append(True)

        assert finished == [True]
        assert exc_info.value.signum == signal.SIGTERM
        assert handler.terminated_by == signal.SIGTERM

    def test_quiet_block_raises_nothing(self):
        handler = ProcessSignalHandler(logger=NullLogger())

        with handler, handler.deferred():
            pass

        assert handler.terminated_by is None

    def test_nested_block_raises_at_outermost(self):
        handler = ProcessSignalHandler(logger=NullLogger())
        handler.install()
        try:
            with pytest.raises(SessionTerminatedError), handler.deferred():
                with handler.deferred():
                    handler._handle_termination(signal.SIGHUP, None)
                assert handler.terminated_by == signal.SIGHUP
        finally:
            handler.restore()

    def test_raises_directly_after_block(self):
        handler = ProcessSignalHandler(logger=NullLogger())
        handler.install()
        try:
            with handler.deferred():
                pass
            with pytest.raises(SessionTerminatedError):
                handler._handle_termination(signal.SIGTERM, None)
        finally:
            handler.restore()
