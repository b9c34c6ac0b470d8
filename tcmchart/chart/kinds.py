# tcmchart/chart/kinds.py
from enum import Enum


class ChartType(str, Enum):
    NEW = "new"
    FOLLOW_UP = "follow-up"


class Sex(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNSPECIFIED = ""
