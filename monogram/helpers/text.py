def extract_glyph(display_name: str) -> str:
    """First letter of the first two name parts, uppercased; "?" when there is no name."""
    if not display_name or not display_name.strip():
        return "?"
    return "".join(part[:1].upper() for part in display_name.split(" ", 1))
