"""Pytest configuration for adrecord tests."""

import pytest

from adrecord import Directory, DirectorySettings, InMemoryDirectory

BASE = "DC=example,DC=org"

JO_DN = "CN=Jo Smith,OU=Users,DC=example,DC=org"
ANN_DN = "CN=Ann Lee,OU=Users,DC=example,DC=org"
BOB_DN = "CN=Bob Stone,OU=Users,DC=example,DC=org"
WS01_DN = "CN=WS01,OU=Computers,DC=example,DC=org"
SALES_DN = "CN=Sales,OU=Groups,DC=example,DC=org"
ENG_DN = "CN=Eng,OU=Groups,DC=example,DC=org"
ADMINS_DN = "CN=Admins,OU=Groups,DC=example,DC=org"
OUTSIDE_DN = "CN=Eve,OU=Users,DC=other,DC=org"

JO_GUID = "0123456789abcdef0123456789abcdef"
JO_PWD_LAST_SET = 1_600_000_000
JO_PASSWORD = "s3cret"

USER_CLASSES = ["top", "person", "organizationalPerson", "user"]


class FakeClock:
    """Controllable clock returning whole seconds."""

    def __init__(self, now: int = 1_000_000) -> None:
        self.now = now

    def __call__(self) -> float:
        return float(self.now)

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock for cache tests."""
    return FakeClock()


@pytest.fixture
def connection() -> InMemoryDirectory:
    """Create an in-memory directory seeded with users, groups and a computer."""
    directory = InMemoryDirectory()

    directory.load(
        JO_DN,
        {
            "objectClass": USER_CLASSES,
            "cn": "Jo Smith",
            "sAMAccountName": "jo",
            "displayName": "Jo Smith",
            "givenName": "Jo",
            "sn": "Smith",
            "mail": "jo@example.org",
            "userAccountControl": "512",
            "objectGUID": bytes.fromhex(JO_GUID),
            "whenCreated": "20200102030405.0Z",
            "pwdLastSet": str((JO_PWD_LAST_SET + 11_644_473_600) * 10_000_000),
            "memberOf": [SALES_DN],
            "directReports": [ANN_DN],
        },
        password=JO_PASSWORD,
    )
    directory.load(
        ANN_DN,
        {
            "objectClass": USER_CLASSES,
            "cn": "Ann Lee",
            "sAMAccountName": "ann",
            "displayName": "Ann Lee",
            "givenName": "Ann",
            "sn": "Lee",
            "userAccountControl": "512",
            "lockoutTime": "0",
            "manager": JO_DN,
            "memberOf": [SALES_DN],
        },
    )
    directory.load(
        BOB_DN,
        {
            "objectClass": USER_CLASSES,
            "cn": "Bob Stone",
            "sAMAccountName": "bob",
            "displayName": "Bob Stone",
            "userAccountControl": "514",
            "lockoutTime": "132000000000000000",
            "memberOf": [ENG_DN],
        },
    )
    directory.load(
        WS01_DN,
        {
            "objectClass": USER_CLASSES + ["computer"],
            "cn": "WS01",
            "name": "WS01",
            "dNSHostName": "ws01.example.org",
        },
    )
    directory.load(
        SALES_DN,
        {
            "objectClass": ["top", "group"],
            "cn": "Sales",
            "member": [JO_DN, ANN_DN, ENG_DN],
            "memberOf": [ENG_DN],
        },
    )
    directory.load(
        ENG_DN,
        {
            "objectClass": ["top", "group"],
            "cn": "Eng",
            "member": [BOB_DN, SALES_DN],
            "memberOf": [SALES_DN],
        },
    )
    directory.load(
        ADMINS_DN,
        {
            "objectClass": ["top", "group"],
            "cn": "Admins",
        },
    )
    directory.load(
        OUTSIDE_DN,
        {
            "objectClass": USER_CLASSES,
            "cn": "Eve",
            "sAMAccountName": "eve",
        },
    )
    return directory


@pytest.fixture
def settings() -> DirectorySettings:
    """Create directory settings rooted at the example domain."""
    return DirectorySettings(base=BASE)


@pytest.fixture
def directory(
    connection: InMemoryDirectory,
    settings: DirectorySettings,
    clock: FakeClock,
) -> Directory:
    """Create a directory over the seeded in-memory connection."""
    return Directory(connection, settings, timer=clock)
