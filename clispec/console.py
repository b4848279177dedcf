# Clispec CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance used for help and error output."""
from rich.console import Console

console = Console(highlight=False)
