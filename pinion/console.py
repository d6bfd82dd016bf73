# Pinion CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance and theme for Pinion applications."""
from rich.console import Console
from rich.theme import Theme

PINION_THEME = Theme(
    {
        "pinion.usage": "bold",
        "pinion.heading": "bold underline",
        "pinion.flag": "cyan",
        "pinion.command": "bold green",
        "pinion.placeholder": "yellow",
        "pinion.error": "bold red",
        "pinion.dim": "dim",
    }
)

console = Console(theme=PINION_THEME)
