"""Allow ``python -m ecs_reconciler``."""

from ecs_reconciler.cli.main import main

main()
