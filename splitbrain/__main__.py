"""Allow ``python -m splitbrain``."""

from splitbrain.cli import main

main()
