"""Typed directory records."""

from adrecord.records.base import Record
from adrecord.records.computer import Computer
from adrecord.records.container import Container
from adrecord.records.group import Group
from adrecord.records.manager import RecordManager
from adrecord.records.user import UAC_ACCOUNT_DISABLED, UAC_NORMAL_ACCOUNT, User

__all__ = [
    "Record",
    "User",
    "Group",
    "Computer",
    "Container",
    "RecordManager",
    "UAC_ACCOUNT_DISABLED",
    "UAC_NORMAL_ACCOUNT",
]
