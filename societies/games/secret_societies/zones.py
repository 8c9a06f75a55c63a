"""
Zones - The seven map locations and their adjacency.
"""

from .definitions import ZoneDefinition


ROYAL_CHAMBER = "Royal Chamber"
CATHEDRAL = "Cathedral"
COURTYARD = "Courtyard"
TRADING_BAILEY = "Trading Bailey"
DOCKS_AND_GATES = "Docks and Gates"
EASTERN_TOWN_SQUARE = "Eastern Town Square"
WESTERN_TOWN_SQUARE = "Western Town Square"

ZONE_NAMES = [
    ROYAL_CHAMBER,
    CATHEDRAL,
    COURTYARD,
    TRADING_BAILEY,
    DOCKS_AND_GATES,
    EASTERN_TOWN_SQUARE,
    WESTERN_TOWN_SQUARE,
]

ZONES = [
    ZoneDefinition(ROYAL_CHAMBER, (COURTYARD, CATHEDRAL)),
    ZoneDefinition(CATHEDRAL, (COURTYARD, EASTERN_TOWN_SQUARE, TRADING_BAILEY, ROYAL_CHAMBER)),
    ZoneDefinition(COURTYARD, (CATHEDRAL, WESTERN_TOWN_SQUARE, TRADING_BAILEY, ROYAL_CHAMBER)),
    ZoneDefinition(
        TRADING_BAILEY,
        (CATHEDRAL, COURTYARD, DOCKS_AND_GATES, EASTERN_TOWN_SQUARE, WESTERN_TOWN_SQUARE),
    ),
    ZoneDefinition(DOCKS_AND_GATES, (EASTERN_TOWN_SQUARE, WESTERN_TOWN_SQUARE, TRADING_BAILEY)),
    ZoneDefinition(EASTERN_TOWN_SQUARE, (DOCKS_AND_GATES, CATHEDRAL, TRADING_BAILEY)),
    ZoneDefinition(WESTERN_TOWN_SQUARE, (DOCKS_AND_GATES, COURTYARD, TRADING_BAILEY)),
]

# Players never start in the Royal Chamber
STARTING_ZONES = [name for name in ZONE_NAMES if name != ROYAL_CHAMBER]
