"""Money helpers and charge value objects.

All amounts are Decimal. Charges validate on construction, so a Charge or
OtherCharge that exists is always non-negative.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from enum import Enum

from jewelry.domain.exceptions import ValidationError

ZERO = Decimal("0")
_CENT = Decimal("0.01")
_HUNDRED = Decimal("100")

# Upper bound for any single amount, weight or rate read from input.
MAX_AMOUNT = Decimal("1000000000000000")


def to_decimal(
    value: str | float | int | Decimal,
    field: str = "amount",
    limit: Decimal | None = MAX_AMOUNT,
) -> Decimal:
    """Coerce user or stored input to a finite Decimal no larger than *limit*."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}: {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid {field}: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid {field}: {value!r}")
    if limit is not None and abs(result) > limit:
        raise ValidationError(f"{field} cannot exceed {limit:,.0f}")
    return result


def round_money(value: Decimal) -> Decimal:
    """Round half-up to two decimal places, whatever the magnitude."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def percent_of(base: Decimal, percentage: Decimal) -> Decimal:
    return base * percentage / _HUNDRED


class ChargeType(Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class Charge:
    """A fixed-or-percentage monetary rule.

    Fixed charges contribute ``value`` as-is; percentage charges contribute
    ``value`` percent of whatever base amount they are resolved against.
    """

    type: ChargeType
    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Charge value must be a Decimal, got {type(self.value).__name__}"
            )
        if self.value < ZERO:
            raise ValidationError(f"Charge value cannot be negative, got {self.value}")

    @property
    def is_zero(self) -> bool:
        return self.value == ZERO

    def resolve(self, base: Decimal) -> Decimal:
        if self.is_zero:
            return ZERO
        if self.type is ChargeType.PERCENTAGE:
            return percent_of(base, self.value)
        return self.value

    def __str__(self) -> str:
        if self.type is ChargeType.PERCENTAGE:
            return f"{self.value}%"
        return f"₹{self.value}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def fixed(value: str | float | int | Decimal) -> Charge:
        return Charge(ChargeType.FIXED, to_decimal(value, "charge value"))

    @staticmethod
    def percentage(value: str | float | int | Decimal) -> Charge:
        return Charge(ChargeType.PERCENTAGE, to_decimal(value, "charge value"))

    @staticmethod
    def none() -> Charge:
        return Charge(ChargeType.FIXED, ZERO)

    @staticmethod
    def parse(raw: str) -> Charge:
        """Parse ``"500"`` as a fixed charge and ``"12%"`` as a percentage."""
        text = raw.strip()
        if text.endswith("%"):
            return Charge.percentage(text[:-1])
        return Charge.fixed(text)


def resolve_charge(charge: Charge | None, base: Decimal) -> Decimal:
    """Resolve an optional charge; an absent charge contributes nothing."""
    if charge is None:
        return ZERO
    return charge.resolve(base)


@dataclass(frozen=True)
class OtherCharge:
    """A named fixed add-on such as a certification or hallmarking fee."""

    name: str
    amount: Decimal

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Other charge name is required")
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Other charge amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < ZERO:
            raise ValidationError(
                f"Other charge '{self.name}' cannot be negative, got {self.amount}"
            )

    @staticmethod
    def of(name: str, amount: str | float | int | Decimal) -> OtherCharge:
        return OtherCharge(name.strip(), to_decimal(amount, f"amount for '{name}'"))
