from uuid import UUID

from blogapi.errors.validation import InvalidIdentifierError


def parse_uuid(value: str | UUID, detail: str = "Invalid ID") -> UUID:
    """
    Parse a path identifier into a UUID.

    Args:
        value: Raw identifier taken from the URL path.
        detail: Message used when the value is not a UUID.

    Returns:
        UUID: The parsed identifier.

    Raises:
        InvalidIdentifierError: If ``value`` is not a well-formed UUID.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value.strip())
    except (ValueError, AttributeError) as e:
        raise InvalidIdentifierError(detail) from e
