from wellbite.models.user import Role


def is_provisioned(role) -> bool:
    """Return True if the role grants access to the API (anything but ``none``)."""
    value = role.value if isinstance(role, Role) else str(role)
    return value != Role.NONE.value
