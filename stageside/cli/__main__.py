"""Allow ``python -m stageside.cli`` execution."""

from stageside.cli.plan import main

main()
