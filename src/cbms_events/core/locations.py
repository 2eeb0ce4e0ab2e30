"""Fixed configuration data for Sorsogon event logistics.

These values are reference data, not protocol:
- SORSOGON_MUNICIPALITIES: locations a participant may register from
- ACCOMMODATION_DAYS: the five lodging days offered per event
- ALL_EVENTS: event-filter sentinel meaning "no restriction"
"""

SORSOGON_MUNICIPALITIES: tuple[str, ...] = (
    "Barcelona",
    "Bulan",
    "Bulusan",
    "Casiguran",
    "Castilla",
    "Donsol",
    "Gubat",
    "Irosin",
    "Juban",
    "Magallanes",
    "Matnog",
    "Pilar",
    "Prieto Diaz",
    "Santa Magdalena",
    "Sorsogon City",
    "Sorsogon Province",
)

ACCOMMODATION_DAYS: tuple[str, ...] = ("day1", "day2", "day3", "day4", "day5")

ALL_EVENTS = "all"
