"""
Canonical enumerations for the asset lifecycle.

Every enumeration carries a string value (what the database stores) and the
legacy numeric code used by older API clients. ``decode`` is the single place
where loose input (name, value, or code) becomes a typed member.
"""

from enum import Enum


class CodedEnum(Enum):
    """Enum member with a stable integer code next to its string value"""

    def __new__(cls, value, code):
        obj = object.__new__(cls)
        obj._value_ = value
        obj.code = code
        return obj

    @classmethod
    def decode(cls, raw):
        """
        Decode a member from its value, name, or numeric code.

        Raises:
            ValueError: If the input does not name a member
        """
        if isinstance(raw, cls):
            return raw

        if isinstance(raw, bool):
            raise ValueError(f"Invalid {cls.__name__}: {raw!r}")

        if isinstance(raw, int):
            for member in cls:
                if member.code == raw:
                    return member
            raise ValueError(f"Invalid {cls.__name__} code: {raw}")

        if isinstance(raw, str):
            text = raw.strip()
            if text.isdigit():
                return cls.decode(int(text))
            lowered = text.lower().replace(' ', '').replace('_', '')
            for member in cls:
                if lowered in (member.value.lower(), member.name.lower().replace('_', '')):
                    return member

        raise ValueError(f"Invalid {cls.__name__}: {raw!r}")

    @classmethod
    def values(cls):
        return [member.value for member in cls]


class AssetStatus(CodedEnum):
    AVAILABLE = ('Available', 1)
    ASSIGNED = ('Assigned', 2)
    UNDER_MAINTENANCE = ('UnderMaintenance', 3)
    RETIRED = ('Retired', 4)
    LOST = ('Lost', 5)


class AssetCategory(CodedEnum):
    LAPTOP = ('Laptop', 1)
    MONITOR = ('Monitor', 2)
    MOBILE_PHONE = ('MobilePhone', 3)
    KEYBOARD = ('Keyboard', 4)
    MOUSE = ('Mouse', 5)
    HEADSET = ('Headset', 6)
    WEBCAM = ('Webcam', 7)
    PRINTER = ('Printer', 8)
    ROUTER = ('Router', 9)
    SWITCH = ('Switch', 10)
    ACCESS_POINT = ('AccessPoint', 11)
    TABLET = ('Tablet', 12)
    OTHER = ('Other', 99)


class AssetCondition(CodedEnum):
    VERY_BAD = ('VeryBad', 1)
    BAD = ('Bad', 2)
    LOW = ('Low', 3)
    GOOD = ('Good', 4)
    VERY_GOOD = ('VeryGood', 5)
    NEW = ('New', 6)


class UserRole(CodedEnum):
    VIEWER = ('Viewer', 1)
    IT_OFFICER = ('ITOfficer', 2)
    ADMIN = ('Admin', 3)


class TimelineType(CodedEnum):
    CREATED = ('Created', 1)
    ASSIGNED = ('Assigned', 2)
    RETURNED = ('Returned', 3)
    MAINTENANCE = ('Maintenance', 4)
    STATUS_CHANGED = ('StatusChanged', 5)
    LOCATION_CHANGED = ('LocationChanged', 6)
    UPDATED = ('Updated', 7)
    SUPPORT_TICKET = ('SupportTicket', 8)
    DELETED = ('Deleted', 9)


class TimelineStatus(CodedEnum):
    COMPLETED = ('Completed', 1)
    IN_PROGRESS = ('InProgress', 2)
    PENDING = ('Pending', 3)
    WARNING = ('Warning', 4)
    ERROR = ('Error', 5)


class AuditAction(CodedEnum):
    CREATED = ('Created', 1)
    UPDATED = ('Updated', 2)
    ASSIGNED = ('Assigned', 3)
    UNASSIGNED = ('Unassigned', 4)
    STATUS_CHANGED = ('StatusChanged', 5)
    LOCATION_CHANGED = ('LocationChanged', 6)
    DELETED = ('Deleted', 7)


def enum_column_values(enum_cls):
    """values_callable for db.Enum so the stored text is the member value"""
    return [member.value for member in enum_cls]
