"""Permission strings and the roles granted each of them."""

from voyage.core.auth.models import UserRole

SUPER_ADMIN = (UserRole.SUPER_ADMIN,)
AGENCY_ADMINS = (UserRole.ADMIN, UserRole.BRANCH_ADMIN)
AGENCY_STAFF = (UserRole.ADMIN, UserRole.BRANCH_ADMIN, UserRole.USER)

# Agency data every staff member reads and writes, admins alone delete
_OPERATIONAL = (
    "clients",
    "bookings",
    "group_bookings",
    "follow_ups",
    "hotel_bookings",
    "journey_bookings",
    "vehicle_bookings",
    "receipts",
)

# Agency reference data, maintained by admins
_REFERENCE = (
    "countries",
    "states",
    "cities",
    "banks",
    "sectors",
    "services",
    "fairs",
    "vehicles",
    "accommodations",
    "hotels",
    "agents",
    "tours",
)


def _build() -> dict[str, tuple[UserRole, ...]]:
    permissions: dict[str, tuple[UserRole, ...]] = {
        "roles.read": (UserRole.SUPER_ADMIN, UserRole.ADMIN),
        "packages.read": SUPER_ADMIN,
        "packages.write": SUPER_ADMIN,
        "packages.delete": SUPER_ADMIN,
        "agencies.read": SUPER_ADMIN,
        "agencies.write": SUPER_ADMIN,
        "agencies.delete": SUPER_ADMIN,
        "subscriptions.read": (UserRole.SUPER_ADMIN, UserRole.ADMIN),
        "subscriptions.write": SUPER_ADMIN,
        "branches.read": AGENCY_STAFF,
        "branches.write": (UserRole.ADMIN,),
        "branches.delete": (UserRole.ADMIN,),
        "users.read": AGENCY_STAFF,
        "users.write": AGENCY_ADMINS,
        "users.delete": AGENCY_ADMINS,
        "users.export": AGENCY_ADMINS,
        "dashboard.read": AGENCY_STAFF,
    }
    for resource in _OPERATIONAL:
        permissions[f"{resource}.read"] = AGENCY_STAFF
        permissions[f"{resource}.write"] = AGENCY_STAFF
        permissions[f"{resource}.delete"] = AGENCY_ADMINS
    for resource in _REFERENCE:
        permissions[f"{resource}.read"] = AGENCY_STAFF
        permissions[f"{resource}.write"] = AGENCY_ADMINS
        permissions[f"{resource}.delete"] = (UserRole.ADMIN,)
    return permissions


PERMISSIONS = _build()


def roles_for(permission: str) -> tuple[UserRole, ...]:
    """Roles granted a permission; unknown permissions are granted to nobody."""
    return PERMISSIONS.get(permission, ())
