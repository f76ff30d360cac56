"""Azure location normalisation."""


def normalize_location(location: str) -> str:
    """
    Normalise an Azure location so "West Europe" and "westeurope" compare equal.

    Args:
        location: Display or canonical location name

    Returns:
        str: Lower-case location without spaces
    """
    return location.replace(" ", "").lower()
