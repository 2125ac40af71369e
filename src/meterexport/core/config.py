"""Export configuration."""

from dataclasses import dataclass

from meterexport.core.models import TimeUnit
from meterexport.core.naming import IDENTITY
from meterexport.core.ports import NamingConvention


@dataclass(frozen=True)
class ExportConfig:
    """Options for the bulk export of a reporting cycle.

    render_cycle reads base_time_unit and naming. Meters take their own
    step length; pass step_ms to them so that windows match the cycle.

    Attributes:
        step_seconds: Length of a reporting step, for callers to hand to
            meters as step_ms.
        base_time_unit: Unit durations are reported in.
        naming: Convention applied to names and tags in documents.
    """

    step_seconds: float = 60.0
    base_time_unit: TimeUnit = TimeUnit.MILLISECONDS
    naming: NamingConvention = IDENTITY

    def __post_init__(self) -> None:
        if self.step_seconds <= 0:
            raise ValueError(f"step_seconds must be positive, got {self.step_seconds}")

    @property
    def step_ms(self) -> int:
        """Step length in milliseconds (at least 1)."""
        return max(1, int(self.step_seconds * 1000))
