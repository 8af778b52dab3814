"""Session roles and which areas each role may change.

Only decides which controls are rendered; it is not an access-control layer.
"""

ROLES = ("admin", "staff", "accountant")

ROLE_OPTIONS = [
    {"value": "admin", "label": "Admin",
     "description": "Full access to orders, inventory, analytics, and configuration."},
    {"value": "staff", "label": "Staff (Packing & Fulfilment)",
     "description": "Manage production batches, inventory movements, and order fulfilment."},
    {"value": "accountant", "label": "Accountant",
     "description": "View invoices, track P&L, manage expenses and exports."},
]

MANAGERS = {
    "orders": {"admin", "staff"},
    "inventory": {"admin", "staff"},
    "billing": {"admin", "accountant"},
    "expenses": {"admin", "accountant"},
}


def normalize_role(role):
    """Return role if it is a known role, else None."""
    return role if role in ROLES else None


def can_manage(role, area):
    """True if the role sees the mutation controls of an area."""
    return role in MANAGERS.get(area, ())
