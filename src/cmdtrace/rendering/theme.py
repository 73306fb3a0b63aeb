"""Shared colors and fonts for rendered output."""

COLORS = {
    "primary": "#E67E22",
    "panel_bg": "#FAFAFA",
    "code_bg": "#F5F5F5",
    "border": "#E0E0E0",
    "text": "#1A1A1A",
    "text_muted": "#999999",
}

MONO_FAMILY = "'SF Mono', Menlo, Consolas, 'Liberation Mono', monospace"
