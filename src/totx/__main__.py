"""Run the totx CLI with ``python -m totx``."""

from totx.cli import main

main()
