"""Tests for herald/middleware/ modules"""

import time
from unittest.mock import MagicMock, patch

import pytest

from herald.commands.argument_types import Command
from herald.core.event_system import EventSystem
from herald.core.results import (
    CommandInvokedFailure,
    CommandInvokedSuccess,
    CooldownInEffect,
    UnhandledCommandExecutionError,
)
from herald.middleware.analytics import AnalyticsMiddleware
from herald.middleware.error_handler import ErrorHandlerMiddleware
from herald.middleware.logging import LoggingMiddleware, describe, result_from

PING = Command(name="ping")


def finished(result):
    return {"event_name": "command_finished", "args": (result,), "kwargs": {}, "stopped": False}


def success():
    return CommandInvokedSuccess(message=MagicMock(), command=PING)


def failure(error):
    return CommandInvokedFailure(message=MagicMock(), command=PING, error=error)


class TestHelpers:
    """Test the shared result helpers."""

    def test_result_from(self):
        result = success()

        assert result_from(finished(result)) is result
        assert result_from({}) is None

    def test_describe(self):
        assert describe(success()) == "success"
        assert describe(failure(CooldownInEffect())) == "cooldown-in-effect"
        assert describe(None) == "unknown"


class TestLoggingMiddleware:
    """Test LoggingMiddleware functionality."""

    def setup_method(self):
        """Setup test instance."""
        self.middleware = LoggingMiddleware()

    @pytest.mark.asyncio
    async def test_pre_phase_logs_event_start(self):
        """Test that pre phase logs event start and tracks time."""
        event_context = finished(success())

        with patch("herald.middleware.logging.logger") as mock_logger:
            await self.middleware(event_context, "pre")

            mock_logger.debug.assert_called_once_with("Event started: command_finished")
            assert "started_at" in event_context

    @pytest.mark.asyncio
    async def test_post_phase_logs_success_with_duration(self):
        """Test that post phase logs successful commands with duration."""
        event_context = finished(success())
        event_context["started_at"] = time.time() - 0.5

        with patch("herald.middleware.logging.logger") as mock_logger:
            await self.middleware(event_context, "post")

            message = mock_logger.info.call_args[0][0]
            assert "Command ping finished: success" in message
            assert "took" in message
            assert "started_at" not in event_context

    @pytest.mark.asyncio
    async def test_post_phase_logs_failure(self):
        """Test that failures are logged as warnings."""
        event_context = finished(failure(CooldownInEffect()))

        with patch("herald.middleware.logging.logger") as mock_logger:
            await self.middleware(event_context, "post")

            mock_logger.warning.assert_called_once_with("Command ping failed: cooldown-in-effect")
            mock_logger.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_post_phase_without_result(self):
        """Test post phase for events that carry no command result."""
        event_context = {"event_name": "other_event"}

        with patch("herald.middleware.logging.logger") as mock_logger:
            await self.middleware(event_context, "post")

            mock_logger.debug.assert_called_once_with("Event completed: other_event")

    @pytest.mark.asyncio
    async def test_handles_missing_event_name(self):
        """Test middleware handles missing event name gracefully."""
        event_context = {}

        # Should not raise exception
        await self.middleware(event_context, "pre")
        await self.middleware(event_context, "post")

    @pytest.mark.asyncio
    async def test_other_phases_ignored(self):
        """Test that other phases are ignored."""
        with patch("herald.middleware.logging.logger") as mock_logger:
            await self.middleware(finished(success()), "unknown_phase")

            mock_logger.debug.assert_not_called()
            mock_logger.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_stopped_events_leave_no_state(self):
        """Test that events stopped after the pre phase leave nothing behind."""
        event_system = EventSystem()
        event_system.add_middleware(self.middleware)
        event_system.add_middleware(lambda event_context, phase: False)

        for _ in range(5):
            await event_system.emit("command_finished", success())

        assert vars(self.middleware) == {}


class TestErrorHandlerMiddleware:
    """Test ErrorHandlerMiddleware functionality."""

    def setup_method(self):
        """Setup test instance."""
        self.middleware = ErrorHandlerMiddleware()

    @pytest.mark.asyncio
    async def test_post_phase_logs_execution_error(self):
        """Test that commands that raised are logged with a traceback."""
        try:
            raise ValueError("Test error message")
        except ValueError as e:
            error = e

        event_context = finished(failure(UnhandledCommandExecutionError(error)))

        with patch("herald.middleware.error_handler.logger") as mock_logger:
            await self.middleware(event_context, "post")

            error_calls = mock_logger.error.call_args_list
            assert len(error_calls) == 2  # One for error, one for traceback
            assert "Unhandled error in command ping: Test error message" in str(error_calls[0])
            assert "Traceback:" in str(error_calls[1])

    @pytest.mark.asyncio
    async def test_post_phase_logs_listener_errors(self):
        """Test that collected listener errors are logged."""
        event_context = finished(success())
        event_context["errors"] = [RuntimeError("listener broke")]

        with patch("herald.middleware.error_handler.logger") as mock_logger:
            await self.middleware(event_context, "post")

            mock_logger.error.assert_called_once()
            assert "Listener error in event command_finished" in mock_logger.error.call_args[0][0]

    @pytest.mark.asyncio
    async def test_post_phase_no_error(self):
        """Test post phase for expected failures and successes."""
        with patch("herald.middleware.error_handler.logger") as mock_logger:
            await self.middleware(finished(success()), "post")
            await self.middleware(finished(failure(CooldownInEffect())), "post")

            mock_logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_pre_phase_ignored(self):
        """Test that pre phase is ignored."""
        event_context = finished(failure(UnhandledCommandExecutionError(ValueError("Test error"))))

        with patch("herald.middleware.error_handler.logger") as mock_logger:
            await self.middleware(event_context, "pre")

            mock_logger.error.assert_not_called()


class TestAnalyticsMiddleware:
    """Test AnalyticsMiddleware functionality."""

    def setup_method(self):
        """Setup test instance."""
        self.middleware = AnalyticsMiddleware()

    @pytest.mark.asyncio
    async def test_pre_phase_counts_outcomes(self):
        """Test that pre phase counts outcomes per command."""
        await self.middleware(finished(success()), "pre")
        await self.middleware(finished(success()), "pre")
        await self.middleware(finished(failure(CooldownInEffect())), "pre")

        assert self.middleware.outcome_counts[("ping", "success")] == 2
        assert self.middleware.get_stats() == {"ping": {"success": 2, "cooldown-in-effect": 1}}

    @pytest.mark.asyncio
    async def test_pre_phase_handles_missing_result(self):
        """Test pre phase handles events without a command result."""
        await self.middleware({}, "pre")

        assert len(self.middleware.outcome_counts) == 0

    @pytest.mark.asyncio
    async def test_post_phase_ignored(self):
        """Test that post phase is ignored."""
        await self.middleware(finished(success()), "post")

        assert len(self.middleware.outcome_counts) == 0

    @pytest.mark.asyncio
    async def test_reset_stats(self):
        """Test clearing collected stats."""
        await self.middleware(finished(success()), "pre")

        self.middleware.reset_stats()

        assert self.middleware.get_stats() == {}


class TestMiddlewareWithDispatcher:
    """Test middleware wired into a dispatcher's event system."""

    @pytest.mark.asyncio
    async def test_analytics_sees_dispatch_outcomes(self, make_message, clock):
        from herald.core.dispatcher import CommandDispatcher

        dispatcher = CommandDispatcher({"ping": MagicMock()}, cooldown=1000, clock=clock)
        analytics = AnalyticsMiddleware()
        dispatcher.events.add_middleware(analytics)

        await dispatcher.process_message(make_message("ping"))
        await dispatcher.process_message(make_message("ping"))

        assert analytics.get_stats() == {"ping": {"success": 1, "cooldown-in-effect": 1}}
