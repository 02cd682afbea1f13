"""Allow ``python -m create_viant``."""

from create_viant.cli import main

main()
