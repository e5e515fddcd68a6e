"""
Fence pricing engine.

Pure math. No I/O, no state. Segment footage × rate, hours × crew rate,
plus flat job fees.

Input: EstimateInputs (segments, height, material, site conditions, gates, fees)
Output: totals dict {totalLf, laborHours, laborCost, materialCost, total}
"""

import math

from .config import settings
from .models import Material, PostSize, WoodType


def _finite(value) -> float:
    """Numeric value of an input, or 0 when missing / NaN / infinite."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


class FencePricingEngine:
    """
    Turns estimate inputs into the totals snapshot stored on a quote.
    """

    # Labor calibration: 36 crew-hours observed on a 466 LF reference job
    CALIBRATION_HOURS = 36.0
    CALIBRATION_LF = 466.0

    TALL_FENCE_HEIGHT_FT = 8.0
    TALL_FENCE_MULT = 1.20
    SLOPE_MULT = 1.15
    ROCKY_MULT = 1.08

    # Gate hours sit outside the site-condition multiplier
    WALK_GATE_HOURS = 1.5
    DOUBLE_GATE_HOURS = 3.0

    BASE_RATE_PER_LF = {
        Material.VINYL: 42.0,
        Material.CHAIN: 28.0,
        Material.WOOD: 25.0,
    }
    WOOD_TYPE_MULT = {
        WoodType.PRESSURE_TREATED: 1.0,
        WoodType.CEDAR: 1.35,
        WoodType.CEDARTONE: 1.6,
    }
    POST_SIZE_MULT = {
        PostSize.FOUR_BY_FOUR: 1.0,
        PostSize.SIX_BY_SIX: 1.2,
    }

    def __init__(self, labor_rate: float = None):
        self.labor_rate = settings.LABOR_RATE if labor_rate is None else labor_rate

    def calculate_totals(self, inputs) -> dict:
        """
        Price one estimate.

        Args:
            inputs: EstimateInputs (or an Estimate, which carries the same fields)

        Returns:
            {"total_lf", "labor_hours", "labor_cost", "material_cost", "total"}
        """
        total_lf = self.total_linear_feet(inputs.segments)
        labor_hours = self._calculate_labor_hours(total_lf, inputs)
        labor_cost = labor_hours * self.labor_rate
        material_cost = self._calculate_material_cost(total_lf, inputs)
        total = self._calculate_total(total_lf, material_cost, labor_cost, inputs)

        return {
            "total_lf": total_lf,
            "labor_hours": labor_hours,
            "labor_cost": labor_cost,
            "material_cost": material_cost,
            "total": total,
        }

    def total_linear_feet(self, segments) -> float:
        """Sum of measured segment lengths. Unmeasured segments count as 0."""
        return sum(_finite(seg.length_ft) for seg in segments)

    def labor_multiplier(self, height_ft, slope: bool, rocky: bool) -> float:
        """Site-condition multiplier. Conditions compound independently."""
        mult = 1.0
        if _finite(height_ft) >= self.TALL_FENCE_HEIGHT_FT:
            mult *= self.TALL_FENCE_MULT
        if slope:
            mult *= self.SLOPE_MULT
        if rocky:
            mult *= self.ROCKY_MULT
        return mult

    def material_rate_per_lf(self, material, wood_type, post_size) -> float:
        """Per-foot material rate before markup."""
        rate = self.BASE_RATE_PER_LF.get(material, self.BASE_RATE_PER_LF[Material.WOOD])
        if material == Material.WOOD:
            rate *= self.WOOD_TYPE_MULT.get(wood_type, 1.0)
            rate *= self.POST_SIZE_MULT.get(post_size, 1.0)
        return rate

    def _calculate_labor_hours(self, total_lf: float, inputs) -> float:
        if total_lf <= 0:
            return 0.0
        base = (self.CALIBRATION_HOURS / self.CALIBRATION_LF) * total_lf
        mult = self.labor_multiplier(inputs.height_ft, inputs.slope, inputs.rocky)
        gate_hours = (
            _finite(inputs.gates_walk) * self.WALK_GATE_HOURS
            + _finite(inputs.gates_double) * self.DOUBLE_GATE_HOURS
        )
        return base * mult + gate_hours

    def _calculate_material_cost(self, total_lf: float, inputs) -> float:
        rate = self.material_rate_per_lf(inputs.material, inputs.wood_type, inputs.post_size)
        raw = total_lf * rate
        return raw * (1 + _finite(inputs.material_markup_pct))

    def _calculate_total(self, total_lf: float, material_cost: float,
                         labor_cost: float, inputs) -> float:
        """Grand total. An estimate with no footage prices at 0, fees included."""
        if total_lf <= 0:
            return 0.0
        fees = (
            _finite(inputs.equipment_fee)
            + _finite(inputs.delivery_fee)
            + _finite(inputs.disposal_fee)
        )
        return material_cost + labor_cost + fees
