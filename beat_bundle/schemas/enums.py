"""Closed enumerations shared by every schema revision.

Values outside these sets are schema violations, so decoders look them up
with ``Enum(value)`` and turn the resulting ValueError into a
FieldDecodeError instead of keeping the raw value.
"""

from enum import Enum, IntEnum


class Environment(str, Enum):
    DEFAULT = "DefaultEnvironment"
    BIG_MIRROR = "BigMirrorEnvironment"
    TRIANGLE = "TriangleEnvironment"
    NICE = "NiceEnvironment"
    KDA = "KDAEnvironment"
    MONSTERCAT = "MonstercatEnvironment"
    ORIGINS = "OriginsEnvironment"
    DRAGONS = "DragonsEnvironment"
    CRAB_RAVE = "CrabRaveEnvironment"
    PANIC = "PanicEnvironment"
    ROCKET = "RocketEnvironment"
    GREEN_DAY = "GreenDayEnvironment"
    GREEN_DAY_GRENADE = "GreenDayGrenadeEnvironment"
    TIMBALAND = "TimbalandEnvironment"
    FIT_BEAT = "FitBeatEnvironment"
    LINKIN_PARK = "LinkinParkEnvironment"
    BTS = "BTSEnvironment"
    KALEIDOSCOPE = "KaleidoscopeEnvironment"
    INTERSCOPE = "InterscopeEnvironment"
    SKRILLEX = "SkrillexEnvironment"
    BILLIE = "BillieEnvironment"
    HALLOWEEN = "HalloweenEnvironment"
    GAGA = "GagaEnvironment"
    GLASS_DESERT = "GlassDesertEnvironment"


class Characteristic(str, Enum):
    STANDARD = "Standard"
    NO_ARROWS = "NoArrows"
    ONE_SABER = "OneSaber"
    LAWLESS = "Lawless"
    LIGHTSHOW = "Lightshow"
    DEGREE_90 = "90Degree"
    DEGREE_360 = "360Degree"
    LEGACY = "Legacy"


class DifficultyName(str, Enum):
    EASY = "Easy"
    NORMAL = "Normal"
    HARD = "Hard"
    EXPERT = "Expert"
    EXPERT_PLUS = "ExpertPlus"


class DifficultyRank(IntEnum):
    """Fixed rank values used from info revision 2 onwards."""

    EASY = 1
    NORMAL = 3
    HARD = 5
    EXPERT = 7
    EXPERT_PLUS = 9


class LineIndex(IntEnum):
    """Horizontal column, left to right."""

    FAR_LEFT = 0
    MID_LEFT = 1
    MID_RIGHT = 2
    FAR_RIGHT = 3


class LineLayer(IntEnum):
    """Vertical row, bottom to top."""

    BOTTOM = 0
    MIDDLE = 1
    TOP = 2


class NoteType(IntEnum):
    RED = 0
    BLUE = 1
    BOMB = 3


class NoteColor(IntEnum):
    """v3 color notes; bombs live in their own array there."""

    RED = 0
    BLUE = 1


class CutDirection(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    UP_LEFT = 4
    UP_RIGHT = 5
    DOWN_LEFT = 6
    DOWN_RIGHT = 7
    DOT = 8


class ObstacleType(IntEnum):
    WALL = 0
    CEILING = 1
