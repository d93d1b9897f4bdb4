"""Formatting of frequencies for display."""


def _display(f: float) -> tuple[str, str]:
    """Readout text and unit for a frequency in Hz."""
    if f < 100.0:
        return f"{f:.1f}", "Hz"
    if f < 10000.0:
        return f"{f:.0f}", "Hz"
    return f"{f / 1000.0:.1f}", "kHz"


def f_to_str(f: float) -> str:
    """Frequency as a short number; kHz above 10 kHz."""
    text, _ = _display(f)
    return text


def f_to_unit(f: float) -> str:
    """Unit matching f_to_str."""
    _, unit = _display(f)
    return unit