"""Allow ``python -m pi.dash``."""

from pi.dash.cli import main

main()
