# Node colors per outcome in the Sankey diagram
OUTCOME_COLORS = {
    "W": "#2ecc71",   # green
    "L": "#e74c3c",   # red
}
DEFAULT_NODE_COLOR = "#bdc3c7"   # grey

# Links not on the highlighted path
DIMMED_LINK_COLOR = "#e0e0e0"
DIMMED_LINK_OPACITY = 0.3

NODE_LINE_COLOR = "black"
LINK_LINE_COLOR = "rgba(0,0,0,0.2)"

# Pastel backgrounds (good for table rows / cells)
TOTAL_ROW_BG = "#F3F4F6"
ROW_BG_EVEN = "#FFFFFF"
ROW_BG_ODD = "#F9FAFB"


def hex_to_rgba(color: str, alpha: float) -> str:
    """"#rrggbb" -> "rgba(r,g,b,alpha)"; rgba()/rgb() strings get their alpha replaced."""
    raw = str(color).strip()
    if raw.startswith("rgb"):
        inner = raw[raw.index("(") + 1: raw.rindex(")")]
        r, g, b = [p.strip() for p in inner.split(",")[:3]]
        return f"rgba({r}, {g}, {b}, {alpha:g})"
    raw = raw.lstrip("#")
    if len(raw) != 6:
        return f"rgba(189, 195, 199, {alpha:g})"
    try:
        r = int(raw[0:2], 16)
        g = int(raw[2:4], 16)
        b = int(raw[4:6], 16)
    except ValueError:
        return f"rgba(189, 195, 199, {alpha:g})"
    return f"rgba({r}, {g}, {b}, {alpha:g})"
