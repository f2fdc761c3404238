"""
Unit Tests for Capacity Planning
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from bmpstego.core.capacity import (
    DEFAULT_OVERHEAD_BYTES,
    check_capacity,
    ensure_capacity,
    plan_capacity,
)
from bmpstego.errors import ErrorKind, InsufficientCapacityError, InvalidInputError


class TestCheckCapacity:
    """Test cases for the admission check."""

    def test_overhead_constant(self):
        """The metadata allowance is 14 bytes."""
        assert DEFAULT_OVERHEAD_BYTES == 14

    def test_exact_fit_accepted(self):
        """Required bytes equal to usable bytes fits."""
        # 32x32x3 pixel bytes -> 384 usable bytes
        assert check_capacity(3072, 384 - 14) is True

    def test_one_byte_over_rejected(self):
        """Required bytes one above usable bytes does not fit."""
        assert check_capacity(3072, 384 - 14 + 1) is False

    def test_partial_carrier_byte_groups_ignored(self):
        """Pixel bytes that do not complete a group of 8 add nothing."""
        assert check_capacity(3072 + 7, 370) is True
        assert check_capacity(3072 + 7, 371) is False

    def test_custom_overhead(self):
        """Callers can override the allowance."""
        assert check_capacity(80, 0, overhead=10) is True
        assert check_capacity(80, 1, overhead=10) is False

    def test_negative_figures_rejected(self):
        """Sizes cannot be negative."""
        with pytest.raises(InvalidInputError):
            check_capacity(-8, 0)


class TestCapacityReport:
    """Test cases for the capacity report."""

    def test_report_figures(self):
        """Report exposes usable, required and maximum secret sizes."""
        report = plan_capacity(3072, 100)
        assert report.usable_bytes == 384
        assert report.required_bytes == 114
        assert report.max_secret_size == 370
        assert report.fits
        assert report.usage_percent == pytest.approx(114 / 384 * 100)

    def test_tiny_cover(self):
        """A cover smaller than the overhead can hide nothing."""
        report = plan_capacity(64, 0)
        assert report.max_secret_size == 0
        assert not report.fits

    def test_empty_cover_usage(self):
        """Usage of an empty cover is reported as full."""
        assert plan_capacity(0, 0).usage_percent == 100.0

    def test_ensure_capacity_raises(self):
        """ensure_capacity reports required and available bytes."""
        with pytest.raises(InsufficientCapacityError) as exc_info:
            ensure_capacity(3072, 371)
        error = exc_info.value
        assert error.kind is ErrorKind.INSUFFICIENT_CAPACITY
        assert error.required == 385
        assert error.available == 384

    def test_ensure_capacity_returns_report(self):
        """A fitting secret yields the report."""
        assert ensure_capacity(3072, 370).fits
