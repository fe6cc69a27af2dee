from enum import Enum


class TransactionType(str, Enum):
    IN = "in"
    OUT = "out"


class StockStatus(str, Enum):
    LOW = "low"
    NORMAL = "normal"


class OversellPolicy(str, Enum):
    CLAMP = "clamp"
    REJECT = "reject"


class MissingItemPolicy(str, Enum):
    REJECT = "reject"
    RECORD = "record"


class ItemDeletePolicy(str, Enum):
    FORBID = "forbid"
    ALLOW = "allow"
