"""Run the console with ``python -m handoff_console``."""

from .main import main

main()
