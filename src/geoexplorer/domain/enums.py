"""
Explorer Enumerations

Core enums for the hierarchy levels and the discrete input actions.
"""

from enum import Enum, IntEnum


class GeoLevel(IntEnum):
    """Hierarchy levels, ordered world < continent < country."""
    WORLD = 0
    CONTINENT = 1
    COUNTRY = 2


class Action(str, Enum):
    """Discrete inputs delivered to the navigation controller."""
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    CONFIRM = "confirm"           # Drill down into the selected item
    BACK = "back"                 # Pop one history frame
    TOGGLE_CHART = "toggle_chart" # GDP chart on/off (country level only)
    QUIT = "quit"
