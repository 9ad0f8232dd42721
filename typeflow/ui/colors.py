"""Theme colors and color utilities for the UI."""


class Palette:
    """Dark palette taken from the TypeFlow web app."""

    BG = "#09090b"
    CARD_BG = "#18181b"
    CARD_BORDER = "#27272a"

    TEXT_PRIMARY = "#f4f4f5"
    TEXT_SECONDARY = "#a1a1aa"
    TEXT_MUTED = "#71717a"

    CORRECT = "#34d399"
    ERROR = "#f87171"
    ACCENT = "#fbbf24"

    XP_TRACK = "#27272a"
    XP_FILL = "#10b981"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    t = max(0.0, min(1.0, float(t)))
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    except ValueError:
        return a
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"
