import uuid


def generate_id() -> str:
    """Opaque record id."""
    return uuid.uuid4().hex
