"""
CO2 calculator for school commutes.

Turns a transport mode and a distance into per-trip, per-day and monthly
emissions, plus the CO2 saved compared to driving alone.
"""
import logging
import math
from dataclasses import dataclass, asdict, replace
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import config

logger = logging.getLogger(__name__)


class TransportMode(str, Enum):
    CAR = "car"
    BUS = "bus"
    BIKE = "bike"
    WALK = "walk"


# Emission factors in g CO2 per km
EMISSION_FACTORS: Mapping[TransportMode, int] = MappingProxyType({
    TransportMode.CAR: 150,
    TransportMode.BUS: 80,
    TransportMode.BIKE: 0,
    TransportMode.WALK: 0,
})

DEFAULT_TRIPS_PER_DAY = 2
DEFAULT_DAYS_PER_MONTH = 20
DEFAULT_PASSENGERS = 1

MAX_DISTANCE_KM = 999
TRIPS_PER_DAY_RANGE = (1, 10)
DAYS_PER_MONTH_RANGE = (1, 31)
PASSENGERS_RANGE = (1, 10)

MODE_NAMES = {
    "sk": {
        TransportMode.CAR: "Auto",
        TransportMode.BUS: "Autobus",
        TransportMode.BIKE: "Bicykel",
        TransportMode.WALK: "Chôdza",
    },
    "en": {
        TransportMode.CAR: "Car",
        TransportMode.BUS: "Bus",
        TransportMode.BIKE: "Bike",
        TransportMode.WALK: "Walk",
    },
}

MODE_ICONS = {
    TransportMode.CAR: "🚗",
    TransportMode.BUS: "🚌",
    TransportMode.BIKE: "🚴",
    TransportMode.WALK: "🚶",
}


@dataclass(frozen=True)
class CalculationRequest:
    mode: Any
    distance_km: Any
    trips_per_day: Any = None
    days_per_month: Any = None
    passengers: Any = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "CalculationRequest":
        return cls(
            mode=payload.get("mode"),
            distance_km=payload.get("distance_km"),
            trips_per_day=payload.get("trips_per_day"),
            days_per_month=payload.get("days_per_month"),
            passengers=payload.get("passengers"),
        )

    def with_defaults(self) -> "CalculationRequest":
        return replace(
            self,
            trips_per_day=DEFAULT_TRIPS_PER_DAY if self.trips_per_day is None else self.trips_per_day,
            days_per_month=DEFAULT_DAYS_PER_MONTH if self.days_per_month is None else self.days_per_month,
            passengers=DEFAULT_PASSENGERS if self.passengers is None else self.passengers,
        )


@dataclass(frozen=True)
class Assumptions:
    mode: TransportMode
    emission_factor: int
    trips_per_day: Union[int, float]
    days_per_month: Union[int, float]
    passengers: Union[int, float]
    distance_km: Union[int, float]


@dataclass(frozen=True)
class CalculationResult:
    per_trip_g: int
    per_day_g: int
    monthly_g: int
    per_trip_kg: float
    per_day_kg: float
    monthly_kg: float
    saved_vs_car_per_trip_kg: Optional[float]
    saved_vs_car_monthly_kg: Optional[float]
    assumptions: Assumptions

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["assumptions"]["mode"] = self.assumptions.mode.value
        return data


@dataclass(frozen=True)
class CalculationError:
    message: str
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"error": self.message}
        if self.field is not None:
            data["field"] = self.field
        return data


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints are always finite, and huge ones overflow float conversion
    return isinstance(value, int) or math.isfinite(value)


def _in_range(value, bounds) -> bool:
    low, high = bounds
    return _is_number(value) and low <= value <= high


def round_half_up(value: float, places: int = 0) -> Union[int, float]:
    """Round the exact binary value of ``value``, ties away from zero."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def _to_mode(mode) -> Optional[TransportMode]:
    try:
        return TransportMode(mode)
    except ValueError:
        return None


def validate_transport_mode(mode) -> Optional[CalculationError]:
    if _to_mode(mode) is None:
        return CalculationError(
            "Invalid transport mode. Allowed values: " + ", ".join(m.value for m in TransportMode),
            field="mode",
        )
    return None


def validate_input(request: CalculationRequest) -> Optional[CalculationError]:
    """
    Check a request against the calculator's domain rules.

    Rules are checked in a fixed order and the first violation wins, so a
    request with both a bad mode and a bad distance reports the mode.
    Returns None when the request is valid.
    """
    request = request.with_defaults()

    error = validate_transport_mode(request.mode)
    if error:
        return error

    distance_km = request.distance_km
    if not _is_number(distance_km):
        return CalculationError("Distance must be a number", field="distance_km")
    if distance_km < 0:
        return CalculationError("Distance must be non-negative", field="distance_km")
    if distance_km > MAX_DISTANCE_KM:
        return CalculationError(f"Distance is too large (max {MAX_DISTANCE_KM} km)", field="distance_km")

    if not _in_range(request.trips_per_day, TRIPS_PER_DAY_RANGE):
        return CalculationError("Trips per day must be between %d and %d" % TRIPS_PER_DAY_RANGE, field="trips_per_day")

    if not _in_range(request.days_per_month, DAYS_PER_MONTH_RANGE):
        return CalculationError("Days per month must be between %d and %d" % DAYS_PER_MONTH_RANGE, field="days_per_month")

    if not _in_range(request.passengers, PASSENGERS_RANGE):
        return CalculationError("Passengers must be between %d and %d" % PASSENGERS_RANGE, field="passengers")

    return None


def get_emission_factor(mode) -> int:
    return EMISSION_FACTORS[TransportMode(mode)]


def calculate_co2(request: CalculationRequest) -> Union[CalculationResult, CalculationError]:
    """
    Calculate emissions for a commute and the savings against a solo car trip.

    Gram figures are rounded to whole grams. Kilogram figures are rounded to
    three decimals from the unrounded gram values, so ``per_trip_kg * 1000``
    can differ from ``per_trip_g``.
    """
    request = request.with_defaults()
    error = validate_input(request)
    if error:
        logger.debug(f"CO2 calculation rejected: field={error.field}, message={error.message}")
        return error

    mode = TransportMode(request.mode)
    distance_km = request.distance_km
    trips_per_day = request.trips_per_day
    days_per_month = request.days_per_month
    passengers = request.passengers

    factor = EMISSION_FACTORS[mode]

    per_trip_g = distance_km * factor
    # Carpooling splits the car's emissions between its occupants
    if mode == TransportMode.CAR and passengers > 1:
        per_trip_g = per_trip_g / passengers

    per_day_g = per_trip_g * trips_per_day
    monthly_g = per_day_g * days_per_month

    saved_vs_car_per_trip_kg = None
    saved_vs_car_monthly_kg = None
    if mode != TransportMode.CAR:
        car_per_trip_g = distance_km * EMISSION_FACTORS[TransportMode.CAR]
        car_monthly_g = car_per_trip_g * trips_per_day * days_per_month
        saved_vs_car_per_trip_kg = round_half_up((car_per_trip_g - per_trip_g) / 1000, 3)
        saved_vs_car_monthly_kg = round_half_up((car_monthly_g - monthly_g) / 1000, 3)

    result = CalculationResult(
        per_trip_g=round_half_up(per_trip_g),
        per_day_g=round_half_up(per_day_g),
        monthly_g=round_half_up(monthly_g),
        per_trip_kg=round_half_up(per_trip_g / 1000, 3),
        per_day_kg=round_half_up(per_day_g / 1000, 3),
        monthly_kg=round_half_up(monthly_g / 1000, 3),
        saved_vs_car_per_trip_kg=saved_vs_car_per_trip_kg,
        saved_vs_car_monthly_kg=saved_vs_car_monthly_kg,
        assumptions=Assumptions(
            mode=mode,
            emission_factor=factor,
            trips_per_day=trips_per_day,
            days_per_month=days_per_month,
            passengers=passengers,
            distance_km=distance_km,
        ),
    )
    logger.debug(f"CO2 calculated for {mode.value}: per_trip_g={result.per_trip_g}, monthly_g={result.monthly_g}")
    return result


def calculate_co2_saved_per_trip(distance_km, mode, passengers=1) -> int:
    """
    Grams of CO2 saved on one trip compared to driving alone.

    Used when recording a station scan. No field validation happens here:
    callers pass a checked distance and mode. An unknown mode raises
    ValueError, a negative or non-finite distance gives 0. A missing
    passenger count means driving alone.
    """
    mode = TransportMode(mode)
    if not _is_number(distance_km) or distance_km < 0:
        return 0

    car_g = distance_km * EMISSION_FACTORS[TransportMode.CAR]
    if passengers is None:
        passengers = DEFAULT_PASSENGERS

    mode_g = distance_km * EMISSION_FACTORS[mode]
    if mode == TransportMode.CAR and passengers > 1:
        mode_g = mode_g / passengers

    return round_half_up(car_g - mode_g)


def get_transport_mode_name(mode, locale=None) -> str:
    names = MODE_NAMES.get(locale or config.MODE_LABEL_LOCALE, MODE_NAMES["en"])
    return names[TransportMode(mode)]


def get_transport_mode_icon(mode) -> str:
    return MODE_ICONS[TransportMode(mode)]


def format_co2(grams) -> str:
    """Format a CO2 amount as grams below 1 kg, otherwise as kg with one decimal."""
    if grams < 1000:
        if isinstance(grams, float) and grams.is_integer():
            grams = int(grams)
        return f"{grams} g"
    return f"{round_half_up(grams / 1000, 1):.1f} kg"
