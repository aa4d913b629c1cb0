from enum import Enum, IntEnum


class CacheLevel(IntEnum):
    NONE = 0
    SOME = 1
    ALL = 2


class Membership(str, Enum):
    join = "join"
    invite = "invite"
    leave = "leave"
    ban = "ban"
    knock = "knock"
