from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.constants import DEFAULT_BREAK_MINUTES
from ..core.enums import PayPeriodType, RateMultiplier

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class RateMultiplierConfig:
    label: str
    multiplier: float


DEFAULT_MULTIPLIERS: tuple[RateMultiplierConfig, ...] = tuple(
    RateMultiplierConfig(label=rate.display_name, multiplier=rate.value) for rate in RateMultiplier
)


@dataclass(frozen=True)
class PayRuleset:
    """Per-owner pay rules: unpaid break default, multiplier table, period cadence.

    Stored by the caller as a JSON blob; ``from_json`` falls back to the
    defaults when the blob cannot be read.
    """

    unpaid_break_minutes: int = DEFAULT_BREAK_MINUTES
    rate_multipliers: tuple[RateMultiplierConfig, ...] = field(default=DEFAULT_MULTIPLIERS)
    pay_period_type: PayPeriodType = PayPeriodType.BIWEEKLY
    schema_version: int = SCHEMA_VERSION
    name: str = "Default"

    def label_for(self, multiplier: float) -> Optional[str]:
        for config in self.rate_multipliers:
            if abs(config.multiplier - float(multiplier)) < 1e-9:
                return config.label
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "schemaVersion": self.schema_version,
            "unpaidBreakMinutes": self.unpaid_break_minutes,
            "rateMultipliers": [{"label": c.label, "multiplier": c.multiplier} for c in self.rate_multipliers],
            "payPeriodType": self.pay_period_type.value,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, name: str = "Default") -> "PayRuleset":
        multipliers = data.get("rateMultipliers")
        if multipliers:
            rate_multipliers = tuple(
                RateMultiplierConfig(label=str(m["label"]), multiplier=float(m["multiplier"])) for m in multipliers
            )
        else:
            rate_multipliers = DEFAULT_MULTIPLIERS

        unpaid_break = int(data.get("unpaidBreakMinutes", DEFAULT_BREAK_MINUTES))
        if unpaid_break < 0:
            raise ValueError(f"unpaidBreakMinutes must not be negative, got {unpaid_break}")

        return cls(
            unpaid_break_minutes=unpaid_break,
            rate_multipliers=rate_multipliers,
            pay_period_type=PayPeriodType(data.get("payPeriodType", PayPeriodType.BIWEEKLY.value)),
            schema_version=int(data.get("schemaVersion", SCHEMA_VERSION)),
            name=name,
        )

    @classmethod
    def from_json(cls, raw: Optional[str], *, name: str = "Default") -> "PayRuleset":
        if not raw:
            return cls(name=name)
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("rules JSON must be an object")
            return cls.from_dict(data, name=name)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Unreadable pay rules %r, using defaults: %s", name, e)
            return cls(name=name)
