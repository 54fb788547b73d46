
def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()

def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()

def uppercase_keys(mapping: dict[str, float] | None) -> dict[str, float] | None:
    """
    Return a copy of `mapping` with every key upper-cased and stripped.

    Location codes arrive from the environment as JSON ({"us": 0.08}) and from
    callers in whatever case they were typed; the tax table is keyed by the
    canonical upper-case form.
    """
    if mapping is None:
        return None
    return {to_uppercase(str(k).strip()): v for k, v in mapping.items()}
