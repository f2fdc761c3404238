"""
Capacity planning.

Each carrier byte hosts one bit, so a cover with N pixel bytes can carry
N // 8 data bytes. Admission requires room for the secret plus a fixed
metadata allowance (signature and both length fields plus a short
extension). The allowance does not track the real extension length; with
extensions capped at four characters it is never smaller than the exact
overhead.
"""

from dataclasses import dataclass

from ..config import DEFAULT_CONFIG
from ..errors import InsufficientCapacityError, InvalidInputError
from ..stego.bits import BITS_PER_BYTE

DEFAULT_OVERHEAD_BYTES = DEFAULT_CONFIG.capacity_overhead


@dataclass
class CapacityReport:
    """
    Capacity figures for one cover/secret pairing.

    Attributes:
        pixel_capacity: Carrier bytes in the cover
        usable_bytes: Data bytes the cover can host
        required_bytes: Secret size plus the fixed overhead
    """

    pixel_capacity: int
    usable_bytes: int
    required_bytes: int
    overhead_bytes: int

    @property
    def fits(self) -> bool:
        return self.usable_bytes >= self.required_bytes

    @property
    def max_secret_size(self) -> int:
        return max(0, self.usable_bytes - self.overhead_bytes)

    @property
    def usage_percent(self) -> float:
        if self.usable_bytes == 0:
            return 100.0
        return min(100.0, self.required_bytes / self.usable_bytes * 100.0)


def plan_capacity(
    cover_capacity_bytes: int,
    secret_size_bytes: int,
    overhead: int = DEFAULT_OVERHEAD_BYTES,
) -> CapacityReport:
    if cover_capacity_bytes < 0 or secret_size_bytes < 0 or overhead < 0:
        raise InvalidInputError("Capacity figures must not be negative")
    return CapacityReport(
        pixel_capacity=cover_capacity_bytes,
        usable_bytes=cover_capacity_bytes // BITS_PER_BYTE,
        required_bytes=secret_size_bytes + overhead,
        overhead_bytes=overhead,
    )


def check_capacity(
    cover_capacity_bytes: int,
    secret_size_bytes: int,
    overhead: int = DEFAULT_OVERHEAD_BYTES,
) -> bool:
    """
    Decide whether a cover can host a secret.

    Args:
        cover_capacity_bytes: Pixel bytes in the cover (width * height * 3)
        secret_size_bytes: Size of the secret file
        overhead: Fixed metadata allowance in data bytes

    Returns:
        True if cover_capacity_bytes // 8 >= secret_size_bytes + overhead.
    """
    return plan_capacity(cover_capacity_bytes, secret_size_bytes, overhead).fits


def ensure_capacity(
    cover_capacity_bytes: int,
    secret_size_bytes: int,
    overhead: int = DEFAULT_OVERHEAD_BYTES,
) -> CapacityReport:
    """
    Like check_capacity, but raises instead of returning False.

    Raises:
        InsufficientCapacityError: If the secret does not fit
    """
    report = plan_capacity(cover_capacity_bytes, secret_size_bytes, overhead)
    if not report.fits:
        raise InsufficientCapacityError(
            required=report.required_bytes, available=report.usable_bytes
        )
    return report
