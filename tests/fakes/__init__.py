"""Fake implementations and sample types for testing."""

from tests.fakes.clock_fake import FakeClock
from tests.fakes.cross_field_formatter_fake import FakeCrossFieldFormatter

__all__ = ["FakeClock", "FakeCrossFieldFormatter"]
