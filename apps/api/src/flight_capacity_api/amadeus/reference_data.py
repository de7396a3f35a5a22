"""Static reference tables used to decorate capacity responses."""

from __future__ import annotations

from types import MappingProxyType

# IATA aircraft type code → display name.
AIRCRAFT_NAMES: MappingProxyType[str, str] = MappingProxyType(
    {
        "319": "Airbus A319",
        "320": "Airbus A320",
        "321": "Airbus A321",
        "32N": "Airbus A320neo",
        "32Q": "Airbus A321neo",
        "332": "Airbus A330-200",
        "333": "Airbus A330-300",
        "339": "Airbus A330-900neo",
        "359": "Airbus A350-900",
        "351": "Airbus A350-1000",
        "388": "Airbus A380-800",
        "221": "Airbus A220-100",
        "223": "Airbus A220-300",
        "737": "Boeing 737",
        "738": "Boeing 737-800",
        "7M8": "Boeing 737 MAX 8",
        "744": "Boeing 747-400",
        "74H": "Boeing 747-8",
        "763": "Boeing 767-300",
        "772": "Boeing 777-200",
        "77W": "Boeing 777-300ER",
        "788": "Boeing 787-8",
        "789": "Boeing 787-9",
        "781": "Boeing 787-10",
        "E90": "Embraer 190",
        "E95": "Embraer 195",
        "AT7": "ATR 72",
        "DH4": "De Havilland Dash 8-400",
    }
)

# Typical seat pitch in inches by cabin, per airline.
LEGROOM: MappingProxyType[str, dict[str, str]] = MappingProxyType(
    {
        "LH": {"ECONOMY": "31", "PREMIUM_ECONOMY": "38", "BUSINESS": "lie-flat"},
        "BA": {"ECONOMY": "31", "PREMIUM_ECONOMY": "38", "BUSINESS": "lie-flat"},
        "EK": {"ECONOMY": "32-34", "PREMIUM_ECONOMY": "38-40", "BUSINESS": "lie-flat"},
        "QR": {"ECONOMY": "31-32", "BUSINESS": "lie-flat"},
        "SQ": {"ECONOMY": "32", "PREMIUM_ECONOMY": "38", "BUSINESS": "lie-flat"},
        "QF": {"ECONOMY": "31", "PREMIUM_ECONOMY": "38", "BUSINESS": "lie-flat"},
        "MH": {"ECONOMY": "32", "BUSINESS": "lie-flat"},
        "AF": {"ECONOMY": "31", "PREMIUM_ECONOMY": "38", "BUSINESS": "lie-flat"},
        "KL": {"ECONOMY": "31", "PREMIUM_ECONOMY": "35", "BUSINESS": "lie-flat"},
        "UA": {"ECONOMY": "30-31", "PREMIUM_ECONOMY": "38", "BUSINESS": "lie-flat"},
        "DL": {"ECONOMY": "30-32", "PREMIUM_ECONOMY": "38", "BUSINESS": "lie-flat"},
        "AA": {"ECONOMY": "30-31", "PREMIUM_ECONOMY": "38", "BUSINESS": "lie-flat"},
    }
)


def aircraft_name(code: str | None) -> str | None:
    if not code:
        return None
    return AIRCRAFT_NAMES.get(code.upper())


def legroom_for(carrier_code: str) -> dict[str, str] | None:
    seats = LEGROOM.get(carrier_code.upper())
    return dict(seats) if seats is not None else None
